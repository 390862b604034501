"""
Senscritique profile scraper.

Drives a Chromium page through a user's rated-films listing, reading titles
from the DOM and ratings from the Apollo cache embedded in __NEXT_DATA__.
The listing paginates client-side, so navigation clicks the numbered
pagination buttons and waits for the current-page marker to change.
"""

import json
import logging
import re
import time
from pathlib import Path
from typing import Any, Dict, List, Optional

from bs4 import BeautifulSoup
from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from scripts.scrapers.base import (
    Movie,
    ScraperConfig,
    absolute_url,
    extract_movie_id,
    parse_title_year,
)
from services.data_processing import log_summary, write_letterboxd_csv

logger = logging.getLogger(__name__)

TITLE_SELECTOR = 'a[data-testid="product-title"]'
RATING_SELECTOR = '[data-testid="Rating"]'
# Listing item wrappers (styled-components hashes, current markup)
ITEM_CONTAINER_CLASSES = ["sc-86ec7c44-5", "jwrjNN"]
PAGINATION_NAV_SELECTOR = 'nav[aria-label*="pagination"], nav[aria-label*="Navigation"]'
CURRENT_PAGE_SELECTOR = "[aria-current]"

USER_INFO_PREFIX = "ProductUserInfos:"
_USER_INFO_KEY_RE = re.compile(r"ProductUserInfos:\d+_(\d+)")

_WAIT_FOR_PAGE_JS = """
(expectedPage) => {
    const current = document.querySelector('[aria-current]');
    return current && current.textContent === String(expectedPage);
}
"""
_WAIT_FOR_TITLES_JS = """
() => document.querySelectorAll('a[data-testid="product-title"]').length > 0
"""


def next_page_selector(page_number: int) -> str:
    return f'[data-testid="click-{page_number}"]'


def parse_apollo_state(soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
    """Return props.pageProps.__APOLLO_STATE__ from the page, or None."""
    script = soup.select_one("#__NEXT_DATA__")
    if script is None:
        return None
    try:
        data = json.loads(script.string or "{}")
    except json.JSONDecodeError:
        logger.warning("Could not parse __NEXT_DATA__ JSON for this page")
        return None
    return data.get("props", {}).get("pageProps", {}).get("__APOLLO_STATE__")


def extract_user_id(apollo_state: Optional[Dict[str, Any]]) -> Optional[str]:
    """Find the profile owner's id from the first ProductUserInfos cache key."""
    if not apollo_state:
        return None
    for key in apollo_state:
        if key.startswith(USER_INFO_PREFIX):
            match = _USER_INFO_KEY_RE.match(key)
            return match.group(1) if match else None
    return None


def rating_from_state(
    apollo_state: Optional[Dict[str, Any]],
    user_id: Optional[str],
    movie_id: Optional[str],
) -> float:
    """Look up the user's rating for a movie in the Apollo cache; 0 if absent."""
    if not apollo_state or not user_id or not movie_id:
        return 0
    user_info = apollo_state.get(f"{USER_INFO_PREFIX}{movie_id}_{user_id}") or {}
    return user_info.get("rating") or 0


def rating_from_html(link) -> float:
    """Fallback: read the rating badge inside the listing item around a title link."""
    container = link.find_parent(class_=ITEM_CONTAINER_CLASSES)
    if container is None:
        return 0
    badge = container.select_one(RATING_SELECTOR)
    if badge is None:
        return 0
    try:
        return float(badge.get_text(strip=True))
    except ValueError:
        return 0


class SenscritiqueScraper:
    """
    Extracts every rated film from a Senscritique profile listing.

    Usage:
        scraper = SenscritiqueScraper(profile_url, ScraperConfig())
        movies = scraper.extract_all_movies()
        scraper.export_to_csv()
    """

    def __init__(self, profile_url: str, config: Optional[ScraperConfig] = None):
        self.profile_url = profile_url
        self.config = config or ScraperConfig()
        self._movies: List[Movie] = []

    @property
    def movies(self) -> List[Movie]:
        """Movies collected so far in this run."""
        return self._movies

    def extract_all_movies(self) -> List[Movie]:
        """
        Launch a browser and collect every rated movie from the profile.

        Errors raised after some movies were collected are logged and those
        movies are returned. Errors before the first movie (page load,
        browser start) propagate.
        """
        logger.info("Starting Senscritique extraction from %s", self.profile_url)
        with sync_playwright() as p:
            browser = p.chromium.launch(headless=self.config.headless)
            try:
                context = browser.new_context(viewport=self.config.viewport)
                page = context.new_page()
                return self.paginate(page)
            finally:
                browser.close()

    def paginate(self, page: Page) -> List[Movie]:
        """Scrape the listing page by page until it runs out or a limit is hit."""
        page_number = 1
        total_expected = 0

        try:
            while True:
                logger.info("Processing page %d...", page_number)
                if page_number == 1:
                    page.goto(self.profile_url, wait_until="networkidle")

                self._wait(self.config.page_load_wait)

                page_movies = self.extract_movies_from_page(page)
                if not page_movies:
                    logger.info("No movies found on page %d. Stopping pagination.", page_number)
                    break

                self._movies.extend(page_movies)
                logger.info(
                    "Page %d: found %d movies (total: %d)",
                    page_number, len(page_movies), len(self._movies),
                )

                if page_number == 1:
                    total_expected = self.get_total_movie_count()
                    logger.info("Target: %d total movies", total_expected)

                if not (self.has_next_page(page) and len(self._movies) < total_expected):
                    break

                if not self.go_to_next_page(page):
                    logger.warning("Failed to navigate to next page. Stopping.")
                    break

                page_number += 1
                self._wait(self.config.next_page_delay)

                if page_number > self.config.max_pages:
                    logger.warning(
                        "Safety limit reached (%d pages). Stopping.", self.config.max_pages
                    )
                    break
        except Exception:
            if not self._movies:
                raise
            logger.exception("Error during extraction; keeping %d movies collected so far",
                             len(self._movies))

        logger.info("Extraction complete: found %d movies total", len(self._movies))
        log_summary(self._movies)
        return self._movies

    def extract_movies_from_page(self, page: Page) -> List[Movie]:
        return self.parse_movies(page.content())

    def parse_movies(self, html: str) -> List[Movie]:
        """
        Parse rated movies out of a listing page's HTML.

        Ratings come from the Apollo cache when available, falling back to
        the rating badge rendered next to each title. Unrated items are
        left out.
        """
        soup = BeautifulSoup(html, "html.parser")
        apollo_state = parse_apollo_state(soup)
        user_id = extract_user_id(apollo_state)

        movies: List[Movie] = []
        for link in soup.select(TITLE_SELECTOR):
            try:
                movie = self._parse_item(link, apollo_state, user_id)
            except (AttributeError, KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping listing item %r: %s", link.get_text(strip=True), exc)
                continue
            if movie is not None:
                movies.append(movie)
        return movies

    def _parse_item(self, link, apollo_state, user_id) -> Optional[Movie]:
        text = link.get_text().strip()
        href = link.get("href")
        if not text or not href:
            return None

        title, year = parse_title_year(text)
        rating = rating_from_state(apollo_state, user_id, extract_movie_id(href))
        if not rating:
            rating = rating_from_html(link)

        if rating <= 0:
            return None
        return Movie(
            title=title,
            year=year,
            rating=rating,
            url=absolute_url(href, self.config.base_url),
        )

    def _current_page_number(self, page: Page) -> Optional[int]:
        element = page.query_selector(CURRENT_PAGE_SELECTOR)
        if element is None:
            return None
        text = (element.text_content() or "1").strip()
        return int(text or "1")

    def has_next_page(self, page: Page) -> bool:
        """Check the pagination widget for a button to the following page."""
        try:
            if page.query_selector(PAGINATION_NAV_SELECTOR) is None:
                logger.debug("No pagination nav found")
                return False

            current = self._current_page_number(page)
            if current is None:
                logger.debug("No current page element found")
                return False

            exists = page.query_selector(next_page_selector(current + 1)) is not None
            logger.debug("Current page: %d, next page element exists: %s", current, exists)
            return exists
        except Exception as exc:
            logger.warning("Could not determine if next page exists: %s", exc)
            return False

    def go_to_next_page(self, page: Page) -> bool:
        """
        Click through to the next listing page.

        Returns:
            True once the next page is (probably) showing, False if there
            was nothing to click or the click failed
        """
        try:
            current = self._current_page_number(page)
            if current is None:
                return False
            next_page = current + 1

            button = page.query_selector(next_page_selector(next_page))
            if button is None:
                logger.info("No next page element found for page %d", next_page)
                return False

            logger.info("Clicking page %d...", next_page)
            button.click()

            try:
                page.wait_for_function(
                    _WAIT_FOR_PAGE_JS,
                    arg=next_page,
                    timeout=self.config.pagination_timeout_ms,
                )
                page.wait_for_function(
                    _WAIT_FOR_TITLES_JS,
                    timeout=self.config.content_timeout_ms,
                )
                self._wait(self.config.settle_wait)
                logger.info("Navigated to page %d", next_page)
            except PlaywrightTimeoutError:
                # Content may still have loaded; carry on after a longer pause.
                logger.warning("Timeout waiting for page %d to load, continuing", next_page)
                self._wait(self.config.timeout_fallback_wait)
            return True
        except Exception as exc:
            logger.warning("Error navigating to next page: %s", exc)
            return False

    def get_total_movie_count(self) -> int:
        """
        Estimated number of movies on the profile.

        This is a fixed pages x items-per-page heuristic, not read from the
        page.
        """
        total = self.config.estimated_total_pages * self.config.items_per_page
        logger.info(
            "Estimated total movies: %d (%d pages x %d per page)",
            total, self.config.estimated_total_pages, self.config.items_per_page,
        )
        return total

    def export_to_csv(self, path: Optional[Path] = None) -> Path:
        """Write the collected movies as a Letterboxd import CSV."""
        output_path = Path(path) if path else self.config.output_path
        logger.info("Exporting to Letterboxd-compatible CSV: %s", output_path)
        return write_letterboxd_csv(self._movies, output_path)

    @staticmethod
    def _wait(seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)
