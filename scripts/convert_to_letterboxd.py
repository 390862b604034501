"""
Convert a Senscritique CSV export to the Letterboxd import format.

Usage:
    python -m scripts.convert_to_letterboxd [input-file] [output-file]

Examples:
    python -m scripts.convert_to_letterboxd
    python -m scripts.convert_to_letterboxd my-export.csv
    python -m scripts.convert_to_letterboxd input.csv output.csv
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from core.config import configure_logging
from services.data_processing.letterboxd import LETTERBOXD_IMPORT_URL, LetterboxdConverter

logger = logging.getLogger(__name__)

DEFAULT_INPUT = "senscritique-movies.csv"
DEFAULT_OUTPUT = "letterboxd-import.csv"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert a Senscritique CSV export to Letterboxd import format."
    )
    parser.add_argument("input", nargs="?", type=Path, default=Path(DEFAULT_INPUT))
    parser.add_argument("output", nargs="?", type=Path, default=Path(DEFAULT_OUTPUT))
    return parser


def run(argv: Optional[List[str]] = None) -> int:
    """Run the conversion and return the process exit code."""
    args = build_parser().parse_args(argv)
    logger.info("Converting Senscritique CSV to Letterboxd format")
    logger.info("Input:  %s", args.input)
    logger.info("Output: %s", args.output)

    try:
        written = LetterboxdConverter().convert(args.input, args.output)
    except FileNotFoundError:
        logger.error("Input file '%s' not found", args.input)
        logger.error(
            "Usage: python -m scripts.convert_to_letterboxd [input-file] [output-file]"
        )
        return 1
    except Exception as exc:
        logger.error("Error: %s", exc)
        return 1

    logger.info("Wrote %d movies to %s", written, args.output)
    logger.info("Format: Title, Year, Rating (0.5-5 scale), Rating10 (1-10 scale)")
    logger.info("Ready for manual import to Letterboxd: %s", LETTERBOXD_IMPORT_URL)
    return 0


def main() -> None:
    configure_logging()
    sys.exit(run())


if __name__ == "__main__":
    main()
