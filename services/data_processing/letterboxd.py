"""
Letterboxd import CSV: rating conversion, row formatting and file conversion.

Letterboxd's importer accepts a CSV with a Title column plus optional Year,
Rating (0.5-5.0 in half steps) and Rating10 (1-10) columns.
"""

import csv
import logging
import math
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from scripts.scrapers.base import Movie

logger = logging.getLogger(__name__)

LETTERBOXD_HEADER = "Title,Year,Rating,Rating10"
LETTERBOXD_IMPORT_URL = "https://letterboxd.com/import/"

Number = Union[int, float]

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)")
_LEADING_FLOAT_RE = re.compile(r"\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+))")


def convert_rating(rating: Number) -> float:
    """
    Convert a 1-10 rating to the Letterboxd 0.5-5.0 half-star scale.

    Halves round up, so 10 -> 5.0, 5 -> 2.5, 1 -> 0.5. Non-positive
    ratings map to 0.
    """
    if rating <= 0:
        return 0.0
    stars = rating / 10 * 5
    return math.floor(stars * 2 + 0.5) / 2


def format_number(value: Optional[Number]) -> str:
    """Render a number the way the import file expects: 5.0 -> "5", 4.5 -> "4.5"."""
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def quote_field(text: str) -> str:
    """Wrap text in double quotes, doubling any embedded quotes."""
    return '"' + text.replace('"', '""') + '"'


def split_fields(line: str) -> List[str]:
    """
    Split a single CSV line into fields.

    Commas inside quoted fields are kept, surrounding quotes are removed
    and doubled quotes are collapsed back to one. Malformed quoting raises
    csv.Error.
    """
    return next(csv.reader([line], strict=True), [])


def format_letterboxd_row(
    title: str,
    year: Union[int, str, None],
    rating: Number,
    rating10: Number,
) -> str:
    """Format one import row. The title is always quoted; a missing year stays empty."""
    return ",".join(
        [
            quote_field(title),
            "" if year is None else str(year),
            format_number(rating),
            format_number(rating10),
        ]
    )


def write_letterboxd_csv(movies: Iterable[Movie], path: Path) -> Path:
    """
    Write movies to a Letterboxd import CSV.

    Args:
        movies: Records with ratings on the 1-10 scale
        path: Output file

    Returns:
        Path to the written file
    """
    path = Path(path)
    rows = [LETTERBOXD_HEADER]
    for movie in movies:
        rows.append(
            format_letterboxd_row(
                movie.title,
                movie.year,
                convert_rating(movie.rating),
                movie.rating,
            )
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(rows), encoding="utf-8")
    logger.info("Exported %d movies to %s", len(rows) - 1, path)
    return path


def _leading_int(value: str) -> int:
    """Parse the leading integer of a string ("8", "8.5", " 7/10"); 0 if none."""
    match = _LEADING_INT_RE.match(value)
    return int(match.group(1)) if match else 0


def _leading_float(value: str) -> float:
    """Parse the leading number of a string ("4.5", "4.5/5", " 4"); 0 if none."""
    match = _LEADING_FLOAT_RE.match(value)
    return float(match.group(1)) if match else 0.0


@dataclass
class ColumnPositions:
    """
    Fixed column positions in a Senscritique export CSV.

    The export is laid out as Title, Year, SourceRating, ..., LetterboxdRating;
    the rating already converted to the Letterboxd scale sits at index 4.
    """

    title: int = 0
    year: int = 1
    source_rating: int = 2
    letterboxd_rating: int = 4

    @property
    def min_fields(self) -> int:
        return max(self.title, self.year, self.source_rating, self.letterboxd_rating) + 1


class LetterboxdConverter:
    """
    Reformats an exported Senscritique CSV into a Letterboxd import CSV.

    Rows without a positive source rating and a positive Letterboxd rating
    are dropped; rows that fail to parse are logged and skipped.
    """

    def __init__(self, positions: ColumnPositions | None = None):
        self.positions = positions or ColumnPositions()

    def convert_row(self, fields: List[str]) -> Optional[str]:
        """
        Convert one parsed input row to an import row.

        Returns:
            The formatted row, or None if the row does not qualify
        """
        pos = self.positions
        if len(fields) < pos.min_fields:
            return None

        title = fields[pos.title]
        year = fields[pos.year].strip()
        source_rating = _leading_int(fields[pos.source_rating])
        letterboxd_rating = _leading_float(fields[pos.letterboxd_rating])

        if source_rating > 0 and letterboxd_rating > 0:
            return format_letterboxd_row(title, year, letterboxd_rating, source_rating)
        return None

    def convert(self, input_path: Path, output_path: Path) -> int:
        """
        Full conversion: read, filter, reformat and write.

        Args:
            input_path: Exported Senscritique CSV
            output_path: Letterboxd import CSV to create

        Returns:
            Number of movie rows written

        Raises:
            FileNotFoundError: If the input file does not exist
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        if not input_path.exists():
            raise FileNotFoundError(f"Input file '{input_path}' not found")

        lines = input_path.read_text(encoding="utf-8-sig").strip().split("\n")
        logger.info(
            "Original file: %d total lines (%d movies + header)",
            len(lines), len(lines) - 1,
        )

        rows = [LETTERBOXD_HEADER]
        for index, raw in enumerate(lines[1:], start=1):
            line = raw.strip()
            if not line:
                continue
            try:
                row = self.convert_row(split_fields(line))
            except (csv.Error, IndexError, ValueError) as exc:
                logger.warning("Error parsing line %d: %s... (%s)", index, line[:50], exc)
                continue
            if row is not None:
                rows.append(row)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text("\n".join(rows), encoding="utf-8")
        logger.info(
            "Generated %s: %d total lines (%d movies + header)",
            output_path, len(rows), len(rows) - 1,
        )
        return len(rows) - 1
