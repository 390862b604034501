"""
Scraper for collecting Senscritique ratings.

This module provides:
- Movie: the rating record every extraction step produces
- ScraperConfig: tunables for a scraper run

The browser-driven scraper lives in scripts.scrapers.senscritique.
"""

from scripts.scrapers.base import Movie, ScraperConfig

__all__ = ["Movie", "ScraperConfig"]
