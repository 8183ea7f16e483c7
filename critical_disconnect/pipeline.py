"""
Pipeline stages that prepare the working dataset.
Each stage takes a list of records and returns a new list; nothing is mutated.
"""

from dataclasses import replace  # copy a frozen record with new field values
from typing import Iterable, List, Optional  # type hints

from loguru import logger  # console logging

from .data_loader import parse_primary_genre  # genre list -> first genre
from .models import MovieRecord  # structured movie record


DEFAULT_EXCLUDED_GENRES = ('Documentary',)


def filter_by_genre(records: Iterable[MovieRecord], excluded: Iterable[str] = DEFAULT_EXCLUDED_GENRES) -> List[MovieRecord]:
	"""
	Set primary_genre on each record and drop records that have none or whose
	primary genre is excluded. Input order is preserved.
	DEFAULT_EXCLUDED_GENRES are dropped whatever `excluded` holds.
	"""
	excluded = set(DEFAULT_EXCLUDED_GENRES) | set(excluded)
	kept = []
	dropped_missing = 0
	dropped_excluded = 0
	for record in records:
		genre = parse_primary_genre(record.genres)
		if genre is None:
			dropped_missing += 1
			continue
		if genre in excluded:
			dropped_excluded += 1
			continue
		kept.append(replace(record, primary_genre=genre))
	logger.info(
		f"[Pipeline] Genre filter kept {len(kept)} | no genre={dropped_missing} | excluded={dropped_excluded}"
	)
	return kept


def decade_of(year: Optional[int]) -> Optional[int]:
	"""1994 -> 1990; None stays None."""
	if year is None:
		return None
	return year - (year % 10)


def derive_fields(records: Iterable[MovieRecord]) -> List[MovieRecord]:
	"""
	Add release_year, release_decade, critical_disconnect and title_with_year.
	Missing inputs propagate as None; no record is dropped.
	"""
	derived = []
	for record in records:
		year = record.release_date.year if record.release_date else None
		if record.critic_score is not None and record.audience_score is not None:
			disconnect = record.critic_score - record.audience_score
		else:
			disconnect = None
		derived.append(replace(
			record,
			release_year=year,
			release_decade=decade_of(year),
			critical_disconnect=disconnect,
			title_with_year=f"{record.title} ({year})" if year is not None else record.title,
		))
	logger.debug(f"[Pipeline] Derived fields for {len(derived)} records")
	return derived
