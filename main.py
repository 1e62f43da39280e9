"""
MovieIndex - Title lookup over IMDb-style datasets

CLI entry point: builds the sorted movie collection, then serves
interactive title searches.
"""

import argparse
import logging
import sys
from typing import Callable

from movie_index.errors import DatasetReadError
from movie_index.models.report import BuildReport
from movie_index.orchestrator import MovieIndexOrchestrator
from movie_index.stages.ordering import SORT_ALGORITHMS
import config.settings as settings

logger = logging.getLogger(__name__)

MENU_LINES = (
    "search - search for a movie by title",
    "quit or q - quit",
)
CHOICE_PROMPT = "Enter your choice: "
TITLE_PROMPT = "Please enter the movie you'd like to search exactly as it was published: "


def setup_logging(log_level: str = "INFO"):
    """Configure logging for the entire application."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=settings.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(settings.LOG_FILE)
        ]
    )


def print_timings(report: BuildReport, output: Callable[[str], None] = print) -> None:
    """Print the stage timing table."""
    df = report.timings_frame()
    if "peak_memory_bytes" in df.columns:
        df["peak_memory_mib"] = (df.pop("peak_memory_bytes") / (1024 * 1024)).round(1)

    output(df.to_string(index=False, float_format=lambda x: f"{x:.4f}"))
    output(f"Total build time: {report.total_seconds:.4f}s")
    output(f"Sort algorithm: {report.sort_algorithm}")


def run_menu(
    orchestrator: MovieIndexOrchestrator,
    input_fn: Callable[[str], str] = input,
    output: Callable[[str], None] = print
) -> int:
    """
    Interactive search loop.

    Returns:
        Exit code (0 on quit or end of input)
    """
    while True:
        for line in MENU_LINES:
            output(line)

        try:
            choice = input_fn(CHOICE_PROMPT).strip().lower()
        except (EOFError, KeyboardInterrupt):
            output("Quitting...")
            return 0

        if choice == "search":
            try:
                title = input_fn(TITLE_PROMPT).strip()
            except (EOFError, KeyboardInterrupt):
                output("Quitting...")
                return 0

            result = orchestrator.search(title)
            if result.found:
                output(f"Movie found: {result.movie.describe()}")
            else:
                output("Movie not found.")
            output(f"Search time ({result.strategy}): {result.elapsed_seconds:.6f}s")

        elif choice in ("q", "quit"):
            output("Quitting...")
            return 0

        else:
            output("Invalid choice, please try again.")


def main():
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="MovieIndex - exact title lookup over IMDb datasets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Use the default dataset locations under data/
  python main.py

  # Explicit files, heapsort, 8 join workers
  python main.py --ratings title.ratings.tsv \\
                 --titles title.basics.tsv \\
                 --sort heapsort --workers 8

  # Files with a header row, partitioned search
  python main.py --skip-header --concurrent-search
        """
    )

    parser.add_argument(
        "--ratings",
        default=str(settings.RATINGS_PATH),
        help=f"Ratings TSV (default: {settings.RATINGS_PATH})"
    )

    parser.add_argument(
        "--titles",
        default=str(settings.TITLES_PATH),
        help=f"Titles TSV (default: {settings.TITLES_PATH})"
    )

    parser.add_argument(
        "--workers",
        type=int,
        default=settings.INGEST_WORKERS,
        help=f"Join worker threads (default: {settings.INGEST_WORKERS})"
    )

    parser.add_argument(
        "--sort",
        default=settings.SORT_ALGORITHM,
        choices=sorted(SORT_ALGORITHMS),
        help=f"Sort algorithm (default: {settings.SORT_ALGORITHM})"
    )

    parser.add_argument(
        "--concurrent-search",
        action="store_true",
        default=settings.USE_CONCURRENT_SEARCH,
        help=f"Search {settings.SEARCH_PARTITIONS} partitions in parallel (case-insensitive match)"
    )

    parser.add_argument(
        "--skip-header",
        action="store_true",
        default=settings.INPUT_HAS_HEADER,
        help="Skip the first line of both input files"
    )

    parser.add_argument(
        "--track-memory",
        action="store_true",
        default=settings.TRACK_MEMORY,
        help="Report peak memory per build stage"
    )

    parser.add_argument(
        "--log-level",
        default=settings.LOG_LEVEL,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help=f"Logging level (default: {settings.LOG_LEVEL})"
    )

    args = parser.parse_args()

    if args.workers < 1:
        parser.error("--workers must be >= 1")

    setup_logging(args.log_level)

    print("=" * 60)
    print("MovieIndex - Title Lookup")
    print("=" * 60)
    print(f"Ratings: {args.ratings}")
    print(f"Titles: {args.titles}")
    print(f"Workers: {args.workers}")
    print(f"Sort: {args.sort}")
    print("=" * 60)
    print()

    orchestrator = MovieIndexOrchestrator(
        worker_count=args.workers,
        sort_algorithm=args.sort,
        has_header=args.skip_header,
        use_concurrent_search=args.concurrent_search,
        track_memory=args.track_memory
    )

    try:
        logger.info("Building movie index...")
        report = orchestrator.build(args.ratings, args.titles)
    except DatasetReadError as e:
        logger.error(f"Build failed: {e}")
        print(f"\nError reading dataset: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("Build interrupted by user")
        print("\nBuild interrupted")
        sys.exit(1)

    print_timings(report)
    print(f"Movies loaded: {len(report.movies)}")
    print()

    sys.exit(run_menu(orchestrator))


if __name__ == "__main__":
    main()


# Design Rationale and Trade-offs:
#
# 1. Exit codes
#    - 0 when the user quits or input reaches EOF
#    - 1 when a dataset cannot be read or the build is interrupted
#    - Trade-off: An interrupt during a search also ends the menu with 0
#
# 2. Injectable menu I/O
#    - run_menu takes input_fn and output so tests drive it with scripted answers
#    - print_timings accepts the same output callable
