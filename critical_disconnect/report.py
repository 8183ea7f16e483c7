"""
Report rendering.
Turns an AnalysisReport into pandas tables, console text and, optionally, CSV files on disk.
"""

from pathlib import Path  # output paths
from typing import Dict, List, Optional  # type hints

import pandas as pd  # tabular rendering and CSV export
from loguru import logger  # console logging

from .models import AnalysisReport, FieldStats, GroupSummary, MovieRecord


SYNOPSIS_WIDTH = 60  # characters of synopsis shown in console lists

STAT_COLUMNS = ['field', 'count', 'mean', 'std', 'min', '25%', '50%', '75%', 'max']
MOVIE_COLUMNS = ['title_with_year', 'primary_genre', 'synopsis', 'critic_score', 'audience_score', 'critical_disconnect']
GROUP_COLUMNS = ['count', 'mean_critic_score', 'mean_audience_score', 'mean_disconnect']


def _truncate(text: Optional[str], width: int) -> Optional[str]:
	if not text:
		return text
	text = ' '.join(text.split())  # collapse newlines and runs of spaces
	return text if len(text) <= width else text[:width - 3] + '...'


def stats_frame(stats: List[FieldStats]) -> pd.DataFrame:
	"""One row per field, laid out like DataFrame.describe() transposed."""
	return pd.DataFrame(
		[[s.field, s.count, s.mean, s.std, s.min, s.q25, s.median, s.q75, s.max] for s in stats],
		columns=STAT_COLUMNS,
	)


def movie_frame(movies: List[MovieRecord], synopsis_width: Optional[int] = None) -> pd.DataFrame:
	"""Columns shown for the critics/audiences favor lists."""
	return pd.DataFrame(
		[
			[
				m.title_with_year,
				m.primary_genre,
				_truncate(m.synopsis, synopsis_width) if synopsis_width else m.synopsis,
				m.critic_score,
				m.audience_score,
				m.critical_disconnect,
			]
			for m in movies
		],
		columns=MOVIE_COLUMNS,
	)


def summary_frame(summaries: List[GroupSummary], key_name: str) -> pd.DataFrame:
	return pd.DataFrame(
		[[s.key, s.count, s.mean_critic_score, s.mean_audience_score, s.mean_disconnect] for s in summaries],
		columns=[key_name] + GROUP_COLUMNS,
	)


def decade_counts_frame(counts: Dict[int, int]) -> pd.DataFrame:
	return pd.DataFrame(list(counts.items()), columns=['decade', 'count'])


def _render(df: pd.DataFrame) -> str:
	if df.empty:
		return '(no rows)'
	return df.to_string(index=False, na_rep='-', float_format=lambda v: f"{v:.2f}")


def format_report(report: AnalysisReport) -> str:
	"""Render the whole report as console text."""
	overall = report.overall

	def fmt(value):
		return '-' if value is None else f"{value:.2f}"

	movie_columns = MOVIE_COLUMNS[:5]
	sections = [
		f"Working dataset: {report.dataset_size} movies "
		f"(excluded primary genres: {', '.join(report.excluded_genres) or 'none'})",
		f"Mean critic score {fmt(overall.mean_critic_score)} | mean audience score "
		f"{fmt(overall.mean_audience_score)} | mean critical disconnect {fmt(overall.mean_disconnect)}",
		'Descriptive statistics\n' + _render(stats_frame(report.field_stats)),
		'Movies per decade\n' + _render(decade_counts_frame(report.decade_counts)),
		f"Top {len(report.critics_favor)} movies critics favor\n"
		+ _render(movie_frame(report.critics_favor, SYNOPSIS_WIDTH)[movie_columns]),
		f"Top {len(report.audiences_favor)} movies audiences favor\n"
		+ _render(movie_frame(report.audiences_favor, SYNOPSIS_WIDTH)[movie_columns]),
		'Genres by mean critical disconnect\n' + _render(summary_frame(report.genre_summaries, 'genre')),
		'Decades by mean critical disconnect\n' + _render(summary_frame(report.decade_summaries, 'decade')),
	]
	return '\n\n'.join(sections) + '\n'


def export_report(report: AnalysisReport, out_dir) -> List[Path]:
	"""
	Write each report table as a CSV file under `out_dir` (created if needed).
	Returns the written paths.
	"""
	out_dir = Path(out_dir)
	out_dir.mkdir(parents=True, exist_ok=True)

	tables = {
		'field_stats.csv': stats_frame(report.field_stats),
		'critics_favor.csv': movie_frame(report.critics_favor),
		'audiences_favor.csv': movie_frame(report.audiences_favor),
		'genre_summary.csv': summary_frame(report.genre_summaries, 'genre'),
		'decade_summary.csv': summary_frame(report.decade_summaries, 'decade'),
		'decade_counts.csv': decade_counts_frame(report.decade_counts),
	}

	written = []
	for name, df in tables.items():
		path = out_dir / name
		df.to_csv(path, index=False)
		logger.debug(f"[Report] Wrote {len(df)} rows to {path}")
		written.append(path)
	logger.info(f"[Report] Exported {len(written)} tables to {out_dir}")
	return written
