"""
Data models for the Critical Disconnect analysis.
Defines the core data structures passed between pipeline stages.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field  # frozen records + default factories
# Import date for typed release dates
from datetime import date  # calendar date without time
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional  # optional values and containers

from .errors import MissingFieldError  # raised when an optional field is absent


@dataclass(frozen=True)
class MovieRecord:
	"""
	Represents a single movie row from the Rotten Tomatoes export.
	Source fields come straight from the CSV; derived fields start as None
	and are filled by the pipeline stages, each of which returns new records.
	"""
	id: str  # rotten_tomatoes_link, e.g. "m/0814255"
	title: str  # movie title as published
	content_rating: Optional[str] = None  # e.g. "PG-13"
	genres: Optional[str] = None  # raw comma-separated genre list
	release_date: Optional[date] = None  # original release date
	critic_score: Optional[float] = None  # tomatometer rating (0-100)
	critic_count: Optional[int] = None  # number of critic reviews
	audience_score: Optional[float] = None  # audience rating (0-100)
	audience_count: Optional[int] = None  # number of audience ratings
	synopsis: Optional[str] = None  # movie_info text
	# Derived fields
	primary_genre: Optional[str] = None  # first entry of the genre list
	release_year: Optional[int] = None  # year of release_date
	release_decade: Optional[int] = None  # release_year rounded down to the decade
	critical_disconnect: Optional[float] = None  # critic_score - audience_score
	title_with_year: Optional[str] = None  # display label "Title (1994)"

	def require(self, name: str) -> Any:
		"""Return the value of `name`, raising MissingFieldError when it is None."""
		value = getattr(self, name)
		if value is None:
			raise MissingFieldError(self.id, name)
		return value


@dataclass(frozen=True)
class GroupSummary:
	"""
	Aggregate of one genre or decade group.
	Means skip missing values and are None when the group has none.
	"""
	key: Any  # group key (genre name, decade, or a label such as "All")
	count: int  # number of records in the group
	mean_critic_score: Optional[float]
	mean_audience_score: Optional[float]
	mean_disconnect: Optional[float]


@dataclass(frozen=True)
class FieldStats:
	"""Descriptive statistics for one numeric field (missing values skipped)."""
	field: str
	count: int
	mean: Optional[float] = None
	std: Optional[float] = None
	min: Optional[float] = None
	q25: Optional[float] = None
	median: Optional[float] = None
	q75: Optional[float] = None
	max: Optional[float] = None


@dataclass(frozen=True)
class AnalysisReport:
	"""
	Every table produced by one analysis run.
	Built once by MovieAnalysis.build_report() and rendered by the report module.
	"""
	dataset_size: int  # records in the working dataset
	field_stats: List[FieldStats]  # descriptive statistics per numeric field
	decade_counts: Dict[int, int]  # movies per decade, ascending decade
	critics_favor: List[MovieRecord]  # highest critical disconnect first
	audiences_favor: List[MovieRecord]  # lowest critical disconnect first
	genre_summaries: List[GroupSummary]  # sorted by mean disconnect, descending
	decade_summaries: List[GroupSummary]  # sorted by mean disconnect, descending
	overall: GroupSummary  # summary over the whole working dataset
	excluded_genres: List[str] = field(default_factory=list)  # genres removed by the filter
