"""
Extract rated movies from a Senscritique profile and export a Letterboxd CSV.

Usage:
    # Profile URL comes from SENSCRITIQUE_PROFILE_URL (environment or .env)
    python -m scripts.extract_movies

    # Override output file / run without a browser window
    python -m scripts.extract_movies --output my-import.csv --headless
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.config import configure_logging, settings
from scripts.scrapers.base import Movie, ScraperConfig
from scripts.scrapers.senscritique import SenscritiqueScraper
from services.data_processing.letterboxd import LETTERBOXD_IMPORT_URL, convert_rating, format_number
from services.data_processing.summary import top_rated

logger = logging.getLogger(__name__)


def print_top_movies(movies: List[Movie], n: int = 10) -> None:
    print(f"\nYour Top {n} Rated Movies:")
    for i, movie in enumerate(top_rated(movies, n), start=1):
        year = movie.year if movie.year is not None else "?"
        stars = format_number(convert_rating(movie.rating))
        print(f"  {i}. {movie.title} ({year}) - {format_number(movie.rating)}/10 -> {stars}/5")


def print_next_steps(output_path: Path) -> None:
    print("\nFiles created:")
    print(f"  - {output_path} (ready for Letterboxd manual import)")
    print("\nNext steps:")
    print(f"  1. Go to {LETTERBOXD_IMPORT_URL}")
    print(f"  2. Upload {output_path.name}")
    print("  3. Review and confirm the import")


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Scrape a Senscritique profile and export a Letterboxd import CSV."
    )
    parser.add_argument("--output", type=Path, default=None, help="Output CSV path")
    parser.add_argument("--headless", action="store_true", help="Run the browser without a window")
    parser.add_argument("--max-pages", type=positive_int, default=None, help="Safety limit on pages scraped")
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Run the extraction and return the process exit code."""
    args = build_parser().parse_args(argv)

    profile_url = settings.SENSCRITIQUE_PROFILE_URL
    if not profile_url:
        logger.error("SENSCRITIQUE_PROFILE_URL not set in environment variables")
        logger.error("Please copy env.template to .env and set your profile URL")
        return 1

    config = ScraperConfig.from_settings(settings)
    if args.output is not None:
        config.output_path = args.output
    if args.headless:
        config.headless = True
    if args.max_pages is not None:
        config.max_pages = args.max_pages

    scraper = SenscritiqueScraper(profile_url, config)
    try:
        movies = scraper.extract_all_movies()
        logger.info("Total movies extracted: %d", len(movies))
        if not movies:
            logger.warning("No rated movies found; nothing to export")
            return 0
        output_path = scraper.export_to_csv()
    except Exception:
        logger.exception("Extraction failed")
        return 1

    print_top_movies(movies)
    print_next_steps(output_path)
    return 0


def main() -> None:
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
