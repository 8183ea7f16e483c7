"""
Shared helpers for the test scripts: assertions, record builders and CSV fixtures.
"""

import csv
import sys
from datetime import date
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
	sys.path.insert(0, str(ROOT))

from critical_disconnect.models import MovieRecord


# Column order of the Rotten Tomatoes movies export
CSV_COLUMNS = [
	'rotten_tomatoes_link', 'movie_title', 'movie_info', 'critics_consensus', 'content_rating',
	'genres', 'directors', 'authors', 'actors', 'original_release_date', 'streaming_release_date',
	'runtime', 'production_company', 'tomatometer_status', 'tomatometer_rating', 'tomatometer_count',
	'audience_status', 'audience_rating', 'audience_count', 'tomatometer_top_critics_count',
	'tomatometer_fresh_critics_count', 'tomatometer_rotten_critics_count',
]


def assert_equal(actual, expected, msg):
	if actual != expected:
		raise AssertionError(f"{msg} | expected={expected}, actual={actual}")


def assert_true(cond, msg):
	if not cond:
		raise AssertionError(msg)


def assert_close(actual, expected, msg, tol=1e-9):
	if actual is None or abs(actual - expected) > tol:
		raise AssertionError(f"{msg} | expected~={expected}, actual={actual}")


def assert_raises(exc_type, fn, msg):
	"""Call fn and return the raised exception; fail if nothing (or something else) is raised."""
	try:
		fn()
	except exc_type as e:
		return e
	raise AssertionError(msg)


def make_movie(
	movie_id,
	critic=None,
	audience=None,
	genres='Drama',
	year=2000,
	critic_count=10,
	audience_count=100,
	title=None,
	synopsis=None,
):
	"""MovieRecord with only the fields the tests care about."""
	return MovieRecord(
		id=movie_id,
		title=title or f"Movie {movie_id}",
		genres=genres,
		release_date=date(year, 6, 1) if year is not None else None,
		critic_score=critic,
		critic_count=critic_count,
		audience_score=audience,
		audience_count=audience_count,
		synopsis=synopsis,
	)


def csv_row(**overrides):
	"""One CSV row with plausible values; keyword arguments replace columns."""
	row = {column: '' for column in CSV_COLUMNS}
	row.update({
		'rotten_tomatoes_link': 'm/example',
		'movie_title': 'Example',
		'movie_info': 'A movie.',
		'content_rating': 'PG',
		'genres': 'Comedy, Drama',
		'original_release_date': '1994-07-06',
		'tomatometer_status': 'Fresh',
		'tomatometer_rating': '71.0',
		'tomatometer_count': '73.0',
		'audience_status': 'Upright',
		'audience_rating': '95.0',
		'audience_count': '1000',
	})
	row.update(overrides)
	return row


def write_csv(path, rows, columns=None):
	"""Write dict rows to `path` using the export's column order."""
	columns = columns or CSV_COLUMNS
	with open(path, 'w', encoding='utf-8', newline='') as f:
		writer = csv.DictWriter(f, fieldnames=columns, extrasaction='ignore')
		writer.writeheader()
		writer.writerows(rows)
	return Path(path)
