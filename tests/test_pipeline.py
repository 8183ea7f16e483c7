"""
Tests for the pipeline stages: genre filter, ranking/truncation, derived fields
and critical-disconnect extremes.
Run: python tests/test_pipeline.py
"""

from helpers import assert_equal, assert_true, make_movie

from critical_disconnect.pipeline import decade_of, derive_fields, filter_by_genre
from critical_disconnect.ranking import Ranker


def test_filter_drops_documentaries_and_missing_genres():
	movies = [
		make_movie('a', genres='Comedy, Documentary'),
		make_movie('b', genres='Documentary, Special Interest'),
		make_movie('c', genres=None),
		make_movie('d', genres='Horror'),
		make_movie('e', genres=' , Drama'),
	]
	kept = filter_by_genre(movies)

	assert_equal([m.id for m in kept], ['a', 'd'], "order preserved, documentaries and empty genres dropped")
	assert_equal([m.primary_genre for m in kept], ['Comedy', 'Horror'], "primary genre set")
	assert_true(all(m.primary_genre is not None and m.primary_genre != 'Documentary' for m in kept), "filter invariant")
	assert_equal(movies[0].primary_genre, None, "input records untouched")


def test_filter_custom_exclusions():
	movies = [make_movie('a', genres='Horror'), make_movie('b', genres='Comedy')]
	kept = filter_by_genre(movies, excluded=['Horror'])
	assert_equal([m.id for m in kept], ['b'], "custom excluded genre")


def test_documentaries_always_excluded():
	movies = [make_movie('doc', genres='Documentary'), make_movie('horror', genres='Horror')]
	assert_equal([m.id for m in filter_by_genre(movies, excluded=[])], ['horror'], "empty exclusion list")
	assert_equal([m.id for m in filter_by_genre(movies, excluded=['Horror'])], [], "extra exclusion adds to Documentary")


def test_rank_drops_missing_counts_and_sorts():
	movies = [
		make_movie('low', audience_count=10, critic_count=5),
		make_movie('no_audience', audience_count=None, critic_count=50),
		make_movie('high', audience_count=500, critic_count=1),
		make_movie('no_critic', audience_count=900, critic_count=None),
		make_movie('mid', audience_count=100, critic_count=3),
	]
	ranked = Ranker(limit=5000).rank_and_truncate(movies)

	assert_equal([m.id for m in ranked], ['high', 'mid', 'low'], "descending by audience count")
	assert_true(all(m.audience_count is not None and m.critic_count is not None for m in ranked), "counts present")


def test_rank_tie_break_on_critic_count():
	movies = [
		make_movie('few_critics', audience_count=100, critic_count=5),
		make_movie('many_critics', audience_count=100, critic_count=50),
		make_movie('top', audience_count=200, critic_count=1),
	]
	ranked = Ranker(tie_break=True).rank_and_truncate(movies)
	assert_equal([m.id for m in ranked], ['top', 'many_critics', 'few_critics'], "secondary key honored")

	single_key = Ranker(tie_break=False).rank_and_truncate(movies)
	assert_equal([m.id for m in single_key], ['top', 'few_critics', 'many_critics'], "single key keeps input order on ties")


def test_rank_truncates_to_limit():
	movies = [make_movie(str(i), audience_count=i, critic_count=i % 7) for i in range(6000)]
	ranked = Ranker(limit=5000).rank_and_truncate(movies)

	assert_equal(len(ranked), 5000, "exactly 5000 when input is larger")
	assert_equal(ranked[0].audience_count, 5999, "largest first")
	keys = [(m.audience_count, m.critic_count) for m in ranked]
	assert_equal(keys, sorted(keys, reverse=True), "sorted descending by (audience, critic)")

	small = Ranker(limit=5000).rank_and_truncate(movies[:42])
	assert_equal(len(small), 42, "fewer records than the limit is fine")


def test_derive_fields():
	movies = [
		make_movie('a', critic=90.0, audience=50.0, year=1994, title='Pulp Fiction'),
		make_movie('b', critic=40.0, audience=None, year=None, title='Undated'),
	]
	derived = derive_fields(movies)

	assert_equal(len(derived), 2, "no record dropped")
	a, b = derived
	assert_equal(a.release_year, 1994, "release year")
	assert_equal(a.release_decade, 1990, "1994 -> 1990")
	assert_equal(a.critical_disconnect, 40.0, "critic - audience")
	assert_equal(a.title_with_year, 'Pulp Fiction (1994)', "title with year")
	assert_equal(b.release_year, None, "missing date -> no year")
	assert_equal(b.release_decade, None, "missing date -> no decade")
	assert_equal(b.critical_disconnect, None, "missing score -> no disconnect")
	assert_equal(b.title_with_year, 'Undated', "title alone without a year")
	assert_equal(movies[0].critical_disconnect, None, "input records untouched")


def test_decade_of():
	assert_equal(decade_of(1994), 1990, "1994")
	assert_equal(decade_of(2000), 2000, "2000")
	assert_equal(decade_of(None), None, "None")


def test_three_movie_scenario():
	dataset = derive_fields([
		make_movie('A', critic=90.0, audience=50.0),
		make_movie('B', critic=40.0, audience=80.0),
		make_movie('C', critic=60.0, audience=60.0),
	])
	assert_equal({m.id: m.critical_disconnect for m in dataset}, {'A': 40.0, 'B': -40.0, 'C': 0.0}, "disconnects")

	ranker = Ranker()
	assert_equal([m.id for m in ranker.critics_favor(dataset, 1)], ['A'], "top-1 critics favor")
	assert_equal([m.id for m in ranker.audiences_favor(dataset, 1)], ['B'], "top-1 audiences favor")
	assert_equal([m.id for m in ranker.select_extremes(dataset, -1)], ['B'], "negative count selects lowest")


def test_top_ten_of_twenty():
	# Distinct disconnects from -47 to 48 in steps of 5, shuffled by a fixed stride
	dataset = derive_fields([
		make_movie(str(i), critic=50.0 + ((i * 7) % 20) * 5 - 47, audience=50.0) for i in range(20)
	])
	top = Ranker().critics_favor(dataset, 10)

	expected = sorted((m.critical_disconnect for m in dataset), reverse=True)[:10]
	assert_equal([m.critical_disconnect for m in top], expected, "10 highest in descending order")


def test_extremes_tie_break_by_year():
	dataset = derive_fields([
		make_movie('old_hi', critic=80.0, audience=60.0, year=1970),
		make_movie('new_hi', critic=80.0, audience=60.0, year=2010),
		make_movie('undated_hi', critic=80.0, audience=60.0, year=None),
		make_movie('old_lo', critic=20.0, audience=60.0, year=1970),
		make_movie('new_lo', critic=20.0, audience=60.0, year=2010),
	])
	ranker = Ranker()
	assert_equal([m.id for m in ranker.critics_favor(dataset, 3)], ['old_hi', 'new_hi', 'undated_hi'], "earlier year first")
	assert_equal([m.id for m in ranker.audiences_favor(dataset, 2)], ['new_lo', 'old_lo'], "later year first")


def test_extremes_edge_cases():
	dataset = derive_fields([
		make_movie('scored', critic=70.0, audience=60.0),
		make_movie('unscored', critic=None, audience=60.0),
	])
	ranker = Ranker()
	assert_equal(ranker.select_extremes(dataset, 0), [], "zero count")
	assert_equal([m.id for m in ranker.critics_favor(dataset, 5)], ['scored'], "missing disconnect skipped, short list ok")
	assert_equal(len(dataset), 2, "selection does not change the dataset")


def main():
	print("Running pipeline tests...")
	test_filter_drops_documentaries_and_missing_genres()
	test_filter_custom_exclusions()
	test_documentaries_always_excluded()
	print(" - genre filter ok")
	test_rank_drops_missing_counts_and_sorts()
	test_rank_tie_break_on_critic_count()
	test_rank_truncates_to_limit()
	print(" - ranking ok")
	test_derive_fields()
	test_decade_of()
	print(" - derived fields ok")
	test_three_movie_scenario()
	test_top_ten_of_twenty()
	test_extremes_tie_break_by_year()
	test_extremes_edge_cases()
	print(" - extremes ok")
	print("All pipeline tests passed!")


if __name__ == '__main__':
	main()
