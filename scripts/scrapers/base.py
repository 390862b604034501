"""
Shared types and parsing helpers for the Senscritique scraper.

Movie is the canonical record every extraction step produces. The helpers
below keep the title/year/URL rules in one place so the page parser and the
tests agree on them.
"""

import re
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Optional, Tuple, Union

Rating = Union[int, float]

_YEAR_RE = re.compile(r"\((\d{4})\)")
_TRAILING_YEAR_RE = re.compile(r"\s*\(\d{4}\)\s*$")
_MOVIE_ID_RE = re.compile(r"/film/[^/]+/(\d+)")


@dataclass
class Movie:
    """
    A single rated movie from a Senscritique profile.

    The rating stays on the source 1-10 scale; conversion to the
    Letterboxd scale happens only when exporting.
    """

    title: str
    year: Optional[int]
    rating: Rating  # 1-10
    url: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ScraperConfig:
    """
    Configuration for a scraper run.

    Attributes:
        base_url: Site root used to absolutize relative hrefs
        output_path: Default destination for export_to_csv()
        headless: Run Chromium without a window
        viewport: Browser viewport size
        max_pages: Safety limit on pages scraped in one run
        page_load_wait: Seconds to wait before reading each page
        next_page_delay: Seconds to pause after moving to the next page
        settle_wait: Seconds to let content settle after pagination
        timeout_fallback_wait: Seconds to wait when a pagination wait times out
        pagination_timeout_ms: Timeout for the current-page marker to update
        content_timeout_ms: Timeout for product titles to reappear
        estimated_total_pages: Pages assumed in the total-count heuristic
        items_per_page: Items per page assumed in the total-count heuristic
    """

    base_url: str = "https://www.senscritique.com"
    output_path: Path = field(default_factory=lambda: Path("letterboxd-import.csv"))
    headless: bool = False
    viewport: dict = field(default_factory=lambda: {"width": 1200, "height": 800})
    max_pages: int = 50
    page_load_wait: float = 2.0
    next_page_delay: float = 1.5
    settle_wait: float = 2.0
    timeout_fallback_wait: float = 3.0
    pagination_timeout_ms: int = 15000
    content_timeout_ms: int = 10000
    estimated_total_pages: int = 30
    items_per_page: int = 18

    @classmethod
    def from_settings(cls, settings) -> "ScraperConfig":
        """Build a config from the application Settings."""
        return cls(
            base_url=settings.SENSCRITIQUE_BASE_URL,
            output_path=Path(settings.OUTPUT_FILE),
            headless=settings.HEADLESS,
            max_pages=settings.MAX_PAGES,
            page_load_wait=settings.PAGE_LOAD_WAIT,
            next_page_delay=settings.NEXT_PAGE_DELAY,
            settle_wait=settings.SETTLE_WAIT,
            timeout_fallback_wait=settings.TIMEOUT_FALLBACK_WAIT,
            pagination_timeout_ms=settings.PAGINATION_TIMEOUT_MS,
            content_timeout_ms=settings.CONTENT_TIMEOUT_MS,
            estimated_total_pages=settings.ESTIMATED_TOTAL_PAGES,
            items_per_page=settings.ITEMS_PER_PAGE,
        )


def parse_title_year(text: str) -> Tuple[str, Optional[int]]:
    """
    Split a listing title into a clean title and an optional year.

    Examples:
        >>> parse_title_year("Alien (1979)")
        ("Alien", 1979)
        >>> parse_title_year("Heat")
        ("Heat", None)
    """
    text = text.strip()
    match = _YEAR_RE.search(text)
    year = int(match.group(1)) if match else None
    return _TRAILING_YEAR_RE.sub("", text), year


def extract_movie_id(href: str) -> Optional[str]:
    """Return the numeric id from a /film/<slug>/<id> href, if present."""
    match = _MOVIE_ID_RE.search(href)
    return match.group(1) if match else None


def absolute_url(href: str, base_url: str) -> str:
    """Prefix site-relative hrefs with the base URL."""
    if href.startswith("/"):
        return f"{base_url.rstrip('/')}{href}"
    return href
