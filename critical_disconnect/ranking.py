"""
Ranking module.
Orders movies by review volume to build the working dataset, and picks the
movies where critics and audiences disagree the most.
"""

from typing import Iterable, List, Optional, Tuple

from loguru import logger

from .errors import MissingFieldError
from .models import MovieRecord


class Ranker:
	"""
	Ranks records by popularity and selects critical-disconnect extremes.
	- limit: size of the working dataset (records beyond it are truncated)
	- tie_break: when True, equal audience counts are ordered by critic count;
	  when False only the audience count is used and ties keep input order
	"""

	def __init__(self, limit: int = 5000, tie_break: bool = True):
		self.limit = limit
		self.tie_break = tie_break

	def rank_and_truncate(self, records: Iterable[MovieRecord]) -> List[MovieRecord]:
		"""
		Drop records missing either review count, sort descending by
		(audience_count, critic_count) and keep the first `limit`.
		"""
		counted = []
		for record in records:
			try:
				counted.append((record, self._sort_key(record)))
			except MissingFieldError as e:
				logger.debug(f"[Ranker] Excluded from ranking: {e}")

		# sorted() is stable, so reverse=True keeps input order among equal keys
		counted.sort(key=lambda pair: pair[1], reverse=True)
		ranked = [record for record, _ in counted[:self.limit]]
		logger.info(
			f"[Ranker] Ranked {len(counted)} records with review counts, kept top {len(ranked)} (limit={self.limit})"
		)
		return ranked

	def _sort_key(self, record: MovieRecord) -> Tuple[int, ...]:
		audience = record.require('audience_count')
		critic = record.require('critic_count')
		if self.tie_break:
			return (audience, critic)
		return (audience,)

	def select_extremes(self, records: Iterable[MovieRecord], n: int) -> List[MovieRecord]:
		"""
		Signed selection over critical_disconnect:
		- n > 0: the n highest values, ties broken by earlier release year
		- n < 0: the |n| lowest values, ties broken by later release year
		Records without a disconnect are skipped. Missing years sort last within a tie.
		"""
		if n == 0:
			return []

		scored = []
		for record in records:
			try:
				scored.append((record.require('critical_disconnect'), record))
			except MissingFieldError as e:
				logger.debug(f"[Ranker] Excluded from disconnect ranking: {e}")

		if n > 0:
			scored.sort(key=lambda pair: (-pair[0], self._year_key(pair[1].release_year, later_first=False)))
		else:
			scored.sort(key=lambda pair: (pair[0], self._year_key(pair[1].release_year, later_first=True)))
		return [record for _, record in scored[:abs(n)]]

	def critics_favor(self, records: Iterable[MovieRecord], n: int = 10) -> List[MovieRecord]:
		"""Movies critics rated most above audiences."""
		return self.select_extremes(records, abs(n))

	def audiences_favor(self, records: Iterable[MovieRecord], n: int = 10) -> List[MovieRecord]:
		"""Movies audiences rated most above critics."""
		return self.select_extremes(records, -abs(n))

	@staticmethod
	def _year_key(year: Optional[int], later_first: bool) -> Tuple[int, int]:
		# (0, ...) for known years so unknown years (1, 0) always come last
		if year is None:
			return (1, 0)
		return (0, -year if later_first else year)
