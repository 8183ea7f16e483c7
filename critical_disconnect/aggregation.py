"""
Aggregation module.
Grouped summaries (per genre, per decade) and descriptive statistics over the working dataset.
"""

# NumPy for means, percentiles and histograms
import numpy as np  # numeric arrays
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple  # type hints

from loguru import logger  # console logging

from .errors import MissingFieldError  # records lacking a value are left out
from .models import FieldStats, GroupSummary, MovieRecord  # result containers


# Numeric fields reported by describe()
STAT_FIELDS = ('critic_score', 'audience_score', 'critic_count', 'audience_count', 'critical_disconnect')

# Grouping keys understood by group_summaries()
GROUP_KEYS = {
	'genre': lambda r: r.primary_genre,
	'decade': lambda r: r.release_decade,
}


def _values(records: Iterable[MovieRecord], field: str) -> List[float]:
	"""Collect the non-missing values of `field`."""
	values = []
	for record in records:
		try:
			values.append(float(record.require(field)))
		except MissingFieldError:
			continue  # excluded from this view only
	return values


def _mean(values: List[float]) -> Optional[float]:
	if not values:
		return None
	return float(np.mean(values))


def summarize(records: List[MovieRecord], key: Any) -> GroupSummary:
	"""Build one GroupSummary for `records`, labelled with `key`."""
	return GroupSummary(
		key=key,
		count=len(records),
		mean_critic_score=_mean(_values(records, 'critic_score')),
		mean_audience_score=_mean(_values(records, 'audience_score')),
		mean_disconnect=_mean(_values(records, 'critical_disconnect')),
	)


def group_summaries(
	records: Iterable[MovieRecord],
	key: Any = 'genre',
	min_count: int = 100,
) -> List[GroupSummary]:
	"""
	Partition records by `key` ('genre', 'decade', or a callable returning the
	group key) and summarize each group with at least `min_count` records.
	Records whose key is None are skipped. Rows come out in first-seen order.
	"""
	key_fn: Callable[[MovieRecord], Any] = GROUP_KEYS[key] if isinstance(key, str) else key

	groups: Dict[Any, List[MovieRecord]] = {}  # dicts keep insertion order
	skipped = 0
	for record in records:
		group = key_fn(record)
		if group is None:
			skipped += 1
			continue
		groups.setdefault(group, []).append(record)

	summaries = [summarize(members, group) for group, members in groups.items() if len(members) >= min_count]
	logger.info(
		f"[Aggregator] {key if isinstance(key, str) else 'custom'} groups: {len(groups)} found, "
		f"{len(summaries)} with >= {min_count} records, {skipped} records without a key"
	)
	return summaries


def sort_summaries(
	summaries: Iterable[GroupSummary],
	field: str = 'mean_disconnect',
	descending: bool = True,
) -> List[GroupSummary]:
	"""Order summary rows by one of their fields; rows where it is None go last."""
	present = [s for s in summaries if getattr(s, field) is not None]
	missing = [s for s in summaries if getattr(s, field) is None]
	present.sort(key=lambda s: getattr(s, field), reverse=descending)
	return present + missing


def describe(records: Iterable[MovieRecord], field: str) -> FieldStats:
	"""
	Count, mean, sample standard deviation, min, quartiles and max of `field`,
	skipping missing values.
	"""
	values = np.asarray(_values(records, field), dtype=float)
	if values.size == 0:
		return FieldStats(field=field, count=0)

	q25, median, q75 = np.percentile(values, [25, 50, 75])
	return FieldStats(
		field=field,
		count=int(values.size),
		mean=float(values.mean()),
		std=float(values.std(ddof=1)) if values.size > 1 else None,
		min=float(values.min()),
		q25=float(q25),
		median=float(median),
		q75=float(q75),
		max=float(values.max()),
	)


def decade_counts(records: Iterable[MovieRecord]) -> Dict[int, int]:
	"""Number of movies per release decade, ascending; unknown decades are skipped."""
	counts: Dict[int, int] = {}
	for record in records:
		if record.release_decade is not None:
			counts[record.release_decade] = counts.get(record.release_decade, 0) + 1
	return dict(sorted(counts.items()))


def histogram(records: Iterable[MovieRecord], field: str, bins: int = 20) -> Tuple[List[float], List[int]]:
	"""
	Bin the non-missing values of `field`.
	Returns (edges, counts) with len(edges) == len(counts) + 1; both empty when there is no data.
	"""
	values = _values(records, field)
	if not values:
		return [], []
	counts, edges = np.histogram(values, bins=bins)
	return [float(e) for e in edges], [int(c) for c in counts]
