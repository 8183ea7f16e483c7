"""
Streamlit dashboard for the Critical Disconnect analysis.
Loads the Rotten Tomatoes CSV, runs the pipeline locally and draws the report
tables and charts.

Run UI:                streamlit run streamlit_app.py
"""

# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Path utilities to locate the dataset
from pathlib import Path  # path handling
# Typing to make function signatures clearer
from typing import List  # list annotations

from pydantic import ValidationError  # invalid sidebar settings

# Local pipeline imports
from critical_disconnect.analysis import MovieAnalysis  # pipeline + report tables
from critical_disconnect.aggregation import histogram  # score distributions
from critical_disconnect.config import PipelineConfig  # validated settings
from critical_disconnect.data_loader import DataLoader  # CSV -> records
from critical_disconnect.errors import DataLoadError  # fatal load failures
from critical_disconnect.models import MovieRecord  # record type
from critical_disconnect.report import movie_frame, stats_frame, summary_frame  # report tables

# Default dataset location relative to the project root
DEFAULT_DATA_PATH = Path('data') / 'rotten_tomatoes_movies.csv'

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Critical Disconnect", layout="wide")  # wide layout

# Main page title
st.title("🍅 Critics vs. Audiences on Rotten Tomatoes")  # friendly header


# Cache parsed rows so sidebar changes only re-run the cheap pipeline stages
@st.cache_data(show_spinner=True)
def load_records(path: str) -> List[MovieRecord]:
	"""Read the CSV once per path."""
	return DataLoader().load_movies_from_csv(path)


# Sidebar contains configuration controls
with st.sidebar:
	st.header("Settings")  # section label
	data_path = st.text_input("Movies CSV", str(DEFAULT_DATA_PATH))  # dataset location
	top_n = st.number_input("Working dataset size", min_value=1, value=5000, step=500)  # truncation limit
	min_group_size = st.number_input("Minimum group size", min_value=1, value=100, step=10)  # group threshold
	list_size = st.slider("Favor list length", min_value=5, max_value=25, value=10)  # top-N lists
	tie_break = st.toggle("Break audience-count ties by critic count", value=True)  # secondary sort key

try:
	config = PipelineConfig(
		data_path=Path(data_path),
		top_n=int(top_n),
		min_group_size=int(min_group_size),
		list_size=list_size,
		tie_break=tie_break,
	)
	with st.spinner("Loading movies..."):
		records = load_records(str(config.data_path))  # DataLoadError on bad input
except ValidationError as e:
	st.error(f"Invalid settings: {e}")
	st.stop()
except DataLoadError as e:
	# Show the load error so users know nothing downstream ran
	st.error(f"Failed to load movie data: {e}")
	st.stop()

analysis = MovieAnalysis(config, records=records)  # build working dataset
report = analysis.build_report()  # all tables

# Headline metrics
c1, c2, c3, c4 = st.columns(4)
c1.metric("Movies analysed", report.dataset_size)
c2.metric("Mean critic score", f"{report.overall.mean_critic_score or 0:.1f}")
c3.metric("Mean audience score", f"{report.overall.mean_audience_score or 0:.1f}")
c4.metric("Mean critical disconnect", f"{report.overall.mean_disconnect or 0:+.1f}")
st.divider()  # visual separator

# Descriptive statistics double as the box-plot numbers (quartiles, min/max)
st.subheader("Descriptive statistics")
st.dataframe(stats_frame(report.field_stats), hide_index=True)

# Movies per decade
st.subheader("Movies per decade")
st.bar_chart(
	{"decade": [str(d) for d in report.decade_counts], "movies": list(report.decade_counts.values())},
	x="decade", y="movies",
)

# Score distributions
st.subheader("Score distributions")
left, right = st.columns(2)
for column, field, label in ((left, 'critic_score', "Critic score"), (right, 'audience_score', "Audience score")):
	edges, counts = histogram(analysis.dataset, field, bins=20)
	with column:
		st.caption(label)
		if counts:
			st.bar_chart({"bin": [f"{e:.0f}" for e in edges[:-1]], "movies": counts}, x="bin", y="movies")
		else:
			st.info("No scores available.")
st.divider()

# Critical-disconnect rankings
for title, movies in (
	(f"Top {len(report.critics_favor)} movies critics favor", report.critics_favor),
	(f"Top {len(report.audiences_favor)} movies audiences favor", report.audiences_favor),
):
	st.subheader(title)
	frame = movie_frame(movies)
	if not frame.empty:
		st.bar_chart(
			frame.rename(columns={"title_with_year": "movie"}),
			x="movie", y="critical_disconnect",
		)
	st.dataframe(frame, hide_index=True)
st.divider()

# Grouped summaries
st.subheader("Genres by mean critical disconnect")
genre_frame = summary_frame(report.genre_summaries, "genre")
st.dataframe(genre_frame, hide_index=True)
if not genre_frame.empty:
	# Genre-level average scores: points above the diagonal are audience favorites
	st.scatter_chart(
		genre_frame,
		x="mean_critic_score", y="mean_audience_score", color="genre",
	)

st.subheader("Decades by mean critical disconnect")
st.dataframe(summary_frame(report.decade_summaries, "decade"), hide_index=True)

# Footer
st.sidebar.markdown("---")  # separator
st.sidebar.caption(f"{len(records)} rows loaded from {config.data_path}")  # data source label
