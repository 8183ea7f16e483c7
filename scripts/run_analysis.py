"""
Run the critic vs. audience analysis from the command line.

This script:
1) Loads movies from the Rotten Tomatoes CSV
2) Builds the working dataset (genre filter, rank, truncate, derive)
3) Prints descriptive statistics, favor lists and grouped summaries
4) Optionally exports every table as CSV

Usage:
    poetry run python -m scripts.run_analysis --data data/rotten_tomatoes_movies.csv
    poetry run python -m scripts.run_analysis --data data/rotten_tomatoes_movies.csv --export reports/
"""

import argparse  # command line options
import sys  # exit codes and log sink
import time  # measure step timings
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging
from pydantic import ValidationError  # bad option values

from critical_disconnect.analysis import MovieAnalysis  # pipeline + report tables
from critical_disconnect.config import PipelineConfig  # validated settings
from critical_disconnect.errors import DataLoadError  # fatal load failures
from critical_disconnect.report import export_report, format_report  # rendering


def parse_args(argv=None):
	root = Path(__file__).resolve().parents[1]  # project root
	parser = argparse.ArgumentParser(description="Compare critic and audience scores of Rotten Tomatoes movies.")
	parser.add_argument('--data', type=Path, default=root / 'data' / 'rotten_tomatoes_movies.csv', help="Path to the movies CSV")
	parser.add_argument('--top-n', type=int, default=5000, help="Size of the working dataset")
	parser.add_argument('--min-group-size', type=int, default=100, help="Smallest genre/decade group to report")
	parser.add_argument('--list-size', type=int, default=10, help="Length of the critics/audiences favor lists")
	parser.add_argument('--exclude-genre', action='append', dest='excluded_genres', help="Extra primary genre to drop (repeatable; Documentary is always dropped)")
	parser.add_argument('--no-tie-break', action='store_true', help="Rank by audience count only")
	parser.add_argument('--export', type=Path, default=None, help="Directory to write CSV tables to")
	parser.add_argument('--log-level', default='INFO', help="loguru level (DEBUG, INFO, WARNING, ...)")
	return parser.parse_args(argv)


def build_config(args) -> PipelineConfig:
	options = dict(
		data_path=args.data,
		top_n=args.top_n,
		min_group_size=args.min_group_size,
		list_size=args.list_size,
		tie_break=not args.no_tie_break,
		export_dir=args.export,
	)
	if args.excluded_genres:
		options['excluded_genres'] = args.excluded_genres
	return PipelineConfig(**options)


def main(argv=None) -> int:
	args = parse_args(argv)

	# Route loguru output through one sink at the requested level
	logger.remove()
	logger.add(sys.stderr, level=args.log_level.upper())

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Critical Disconnect Analysis")
	logger.info("=" * 60)

	try:
		config = build_config(args)
	except ValidationError as e:
		logger.error(f"Invalid options: {e}")
		return 1

	# 1) + 2) Load data and build the working dataset
	logger.info("[1/3] Loading movies and building working dataset...")
	t0 = time.time()  # start timer
	try:
		analysis = MovieAnalysis(config)
	except DataLoadError as e:
		logger.error(f"Load failed: {e}")
		return 1
	logger.info(f"[OK] {len(analysis.dataset)} movies in working dataset ({time.time() - t0:.2f}s)")

	# 3) Report
	logger.info("[2/3] Computing report tables...")
	report = analysis.build_report()
	print(format_report(report))

	# 4) Export
	if config.export_dir is not None:
		logger.info(f"[3/3] Exporting tables to {config.export_dir}...")
		export_report(report, config.export_dir)
	else:
		logger.info("[3/3] No export directory given; skipping CSV export.")

	logger.info("All done!")
	logger.info("=" * 60)
	return 0


if __name__ == '__main__':
	sys.exit(main())  # invoke analysis
