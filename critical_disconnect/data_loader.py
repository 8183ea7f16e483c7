"""
Data loading module.
Reads the Rotten Tomatoes movie CSV with pandas and converts the coerced
frame into typed MovieRecord objects.
"""

# Typing and paths
from typing import Any, List, Optional  # type hints
from pathlib import Path  # filesystem-safe paths

# pandas for CSV parsing and column coercion, NumPy for finiteness checks
import numpy as np  # numeric helpers
import pandas as pd  # tabular reading

# Import our record type and load error
from .models import MovieRecord  # structured movie record
from .errors import DataLoadError  # fatal load failures

# Console logging
from loguru import logger  # console logger


def parse_primary_genre(raw: Optional[str]) -> Optional[str]:
	"""
	Return the first entry of a comma-separated genre list, or None when
	the list is missing or its first entry is blank.
	"""
	if not raw:  # None or empty string
		return None
	first = raw.split(',', 1)[0].strip()  # only the leading token matters
	return first or None


def _missing(value: Any) -> bool:
	return value is None or (not isinstance(value, str) and pd.isna(value))


class DataLoader:
	"""
	Handles loading the movie CSV and converting each row to a MovieRecord.
	Unparseable values become None; only structural problems raise.
	"""

	# CSV column -> MovieRecord field
	COLUMN_MAP = {
		'rotten_tomatoes_link': 'id',
		'movie_title': 'title',
		'content_rating': 'content_rating',
		'genres': 'genres',
		'original_release_date': 'release_date',
		'tomatometer_rating': 'critic_score',
		'tomatometer_count': 'critic_count',
		'audience_rating': 'audience_score',
		'audience_count': 'audience_count',
		'movie_info': 'synopsis',
	}

	REQUIRED_COLUMNS = tuple(COLUMN_MAP)
	TEXT_COLUMNS = ('rotten_tomatoes_link', 'movie_title', 'content_rating', 'genres', 'movie_info')
	SCORE_COLUMNS = ('tomatometer_rating', 'audience_rating')
	COUNT_COLUMNS = ('tomatometer_count', 'audience_count')

	# Accepted release date layouts, tried in order
	DATE_FORMATS = ('%Y-%m-%d', '%Y-%m-%d %H:%M:%S', '%m/%d/%Y', '%Y')

	def load_movies_from_csv(self, filepath) -> List[MovieRecord]:
		"""
		Load movies from a CSV file with the Rotten Tomatoes export columns.
		Returns a list of MovieRecord objects in file order.
		"""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.is_file():
			raise DataLoadError(f"Movie data file not found: {filepath}")

		logger.info(f"[Loader] Loading movies from {filepath}...")  # log action

		try:
			# Everything is read as text; coercion happens per column below
			df = pd.read_csv(filepath, dtype=str, encoding='utf-8', keep_default_na=False)
		except pd.errors.EmptyDataError as e:
			raise DataLoadError(f"Movie data file is empty: {filepath}") from e
		except pd.errors.ParserError as e:
			raise DataLoadError(f"Movie data file is not valid CSV: {filepath} ({e})") from e
		except UnicodeDecodeError as e:
			raise DataLoadError(f"Movie data file is not valid UTF-8: {filepath} ({e})") from e
		except OSError as e:
			raise DataLoadError(f"Could not read movie data file {filepath}: {e}") from e

		df.columns = [str(c).strip() for c in df.columns]  # headers with stray spaces still match
		missing = [c for c in self.REQUIRED_COLUMNS if c not in df.columns]
		if missing:
			raise DataLoadError(f"Movie data file {filepath} is missing columns: {', '.join(missing)}")

		movies = self._to_records(self._coerce(df[list(self.REQUIRED_COLUMNS)]))
		logger.info(f"[Loader] Successfully loaded {len(movies)} movies.")  # summary
		return movies

	def _coerce(self, df: pd.DataFrame) -> pd.DataFrame:
		"""
		Type every column: trimmed text (blank -> missing), finite floats,
		whole-number counts, and dates in one of DATE_FORMATS.
		"""
		out = pd.DataFrame(index=df.index)
		for column in self.TEXT_COLUMNS:
			text = df[column].fillna('').str.strip()  # short rows leave NaN
			out[column] = text.where(text != '')

		for column in self.SCORE_COLUMNS + self.COUNT_COLUMNS:
			raw = df[column].fillna('').str.strip()
			numbers = pd.to_numeric(raw, errors='coerce')
			numbers = numbers.where(np.isfinite(numbers))  # inf/-inf count as missing
			if column in self.COUNT_COLUMNS:
				numbers = numbers.where(numbers % 1 == 0)  # fractional counts are not counts
			self._log_dropped(column, raw, numbers)
			out[column] = numbers

		raw_dates = df['original_release_date'].fillna('').str.strip()
		dates = pd.Series(pd.NaT, index=df.index, dtype='datetime64[ns]')
		for fmt in self.DATE_FORMATS:
			dates = dates.combine_first(pd.to_datetime(raw_dates, format=fmt, errors='coerce'))
		self._log_dropped('original_release_date', raw_dates, dates)
		out['original_release_date'] = dates
		return out

	def _log_dropped(self, column: str, raw: pd.Series, coerced: pd.Series) -> None:
		dropped = int(((raw != '') & coerced.isna()).sum())
		if dropped:
			logger.debug(f"[Loader] {dropped} unparseable {column} values treated as missing")

	def _to_records(self, df: pd.DataFrame) -> List[MovieRecord]:
		"""Build one MovieRecord per row of the coerced frame."""
		columns = {c: [None if _missing(v) else v for v in df[c].tolist()] for c in df.columns}
		movies = []
		for i in range(len(df)):
			release = columns['original_release_date'][i]
			critic_count = columns['tomatometer_count'][i]
			audience_count = columns['audience_count'][i]
			movies.append(MovieRecord(
				id=columns['rotten_tomatoes_link'][i] or f"row-{i + 2}",  # fall back to file line number
				title=columns['movie_title'][i] or '',
				content_rating=columns['content_rating'][i],
				genres=columns['genres'][i],
				release_date=release.date() if release is not None else None,
				critic_score=self._float(columns['tomatometer_rating'][i]),
				critic_count=int(critic_count) if critic_count is not None else None,
				audience_score=self._float(columns['audience_rating'][i]),
				audience_count=int(audience_count) if audience_count is not None else None,
				synopsis=columns['movie_info'][i],
			))
		return movies

	@staticmethod
	def _float(value) -> Optional[float]:
		return float(value) if value is not None else None
