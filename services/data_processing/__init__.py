"""
Rating conversion, Letterboxd CSV output and run summaries.
"""

from services.data_processing.letterboxd import (
    ColumnPositions,
    LetterboxdConverter,
    convert_rating,
    write_letterboxd_csv,
)
from services.data_processing.summary import log_summary, rating_distribution, top_rated

__all__ = [
    "ColumnPositions",
    "LetterboxdConverter",
    "convert_rating",
    "write_letterboxd_csv",
    "log_summary",
    "rating_distribution",
    "top_rated",
]
