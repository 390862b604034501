"""
Run reports for extracted ratings: distribution and top-rated listing.
"""

import logging
from typing import Dict, List, Sequence

import pandas as pd

from scripts.scrapers.base import Movie
from services.data_processing.letterboxd import format_number

logger = logging.getLogger(__name__)

COLUMNS = ["title", "year", "rating", "url"]


def movies_to_frame(movies: Sequence[Movie]) -> pd.DataFrame:
    """Build a DataFrame with one row per movie, preserving extraction order."""
    return pd.DataFrame([m.to_dict() for m in movies], columns=COLUMNS)


def rating_distribution(movies: Sequence[Movie]) -> Dict[float, int]:
    """
    Count movies per rating, highest rating first.

    Returns:
        Ordered mapping of rating -> number of movies
    """
    if not movies:
        return {}
    counts = movies_to_frame(movies)["rating"].value_counts().sort_index(ascending=False)
    return {rating: int(count) for rating, count in counts.items()}


def top_rated(movies: Sequence[Movie], n: int = 10) -> List[Movie]:
    """Return the n highest rated movies; ties keep extraction order."""
    if not movies:
        return []
    df = movies_to_frame(movies)
    order = df.sort_values("rating", ascending=False, kind="stable").index[:n]
    return [movies[i] for i in order]


def log_summary(movies: Sequence[Movie]) -> None:
    """Log the total count and the rating distribution."""
    logger.info("Extraction summary: %d movies", len(movies))
    for rating, count in rating_distribution(movies).items():
        logger.info("  %s/10: %d movies", format_number(rating), count)
