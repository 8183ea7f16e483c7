"""
Analysis module.
Runs the pipeline stages once and assembles the report tables.
"""

from typing import List, Optional  # type annotations for clarity

# Import project modules for data structures and components
from .config import PipelineConfig  # run settings
from .data_loader import DataLoader  # CSV -> records
from .models import AnalysisReport, MovieRecord  # core data classes
from .pipeline import derive_fields, filter_by_genre  # preparation stages
from .ranking import Ranker  # ranking and extremes
from . import aggregation  # grouped summaries and statistics

# Import loguru for console logging
from loguru import logger  # simple structured logger


class MovieAnalysis:
	"""
	High-level API: load -> filter -> rank/truncate -> derive, then report.
	Pass `records` to analyse rows that are already loaded (tests, dashboard
	re-runs); otherwise the CSV at config.data_path is read.
	"""

	def __init__(self, config: PipelineConfig, records: Optional[List[MovieRecord]] = None):
		self.config = config  # keep settings for report building
		self.ranker = Ranker(limit=config.top_n, tie_break=config.tie_break)  # ranker instance

		# Load raw rows unless the caller supplied them
		if records is None:
			records = DataLoader().load_movies_from_csv(config.data_path)  # DataLoadError propagates
		self.raw_records = records  # untouched input
		logger.info(f"[Analysis] Building working dataset from {len(records)} raw records")

		filtered = filter_by_genre(records, excluded=config.excluded_genres)  # genre filter
		ranked = self.ranker.rank_and_truncate(filtered)  # top N by review counts
		self.dataset = derive_fields(ranked)  # working dataset
		logger.info(f"[Analysis] Working dataset ready with {len(self.dataset)} records")

	def critics_favor(self, n: Optional[int] = None) -> List[MovieRecord]:
		"""Top n movies critics liked more than audiences."""
		return self.ranker.critics_favor(self.dataset, self.config.list_size if n is None else n)

	def audiences_favor(self, n: Optional[int] = None) -> List[MovieRecord]:
		"""Top n movies audiences liked more than critics."""
		return self.ranker.audiences_favor(self.dataset, self.config.list_size if n is None else n)

	def genre_summaries(self):
		rows = aggregation.group_summaries(self.dataset, 'genre', min_count=self.config.min_group_size)
		return aggregation.sort_summaries(rows, 'mean_disconnect', descending=True)

	def decade_summaries(self):
		rows = aggregation.group_summaries(self.dataset, 'decade', min_count=self.config.min_group_size)
		return aggregation.sort_summaries(rows, 'mean_disconnect', descending=True)

	def build_report(self) -> AnalysisReport:
		"""Compute every table of the report from the working dataset."""
		logger.info("[Analysis] Building report...")
		return AnalysisReport(
			dataset_size=len(self.dataset),
			field_stats=[aggregation.describe(self.dataset, f) for f in aggregation.STAT_FIELDS],
			decade_counts=aggregation.decade_counts(self.dataset),
			critics_favor=self.critics_favor(),
			audiences_favor=self.audiences_favor(),
			genre_summaries=self.genre_summaries(),
			decade_summaries=self.decade_summaries(),
			overall=aggregation.summarize(self.dataset, 'All'),
			excluded_genres=list(self.config.excluded_genres),
		)
