"""
Pytest configuration and shared fixtures.
"""

import json

import pytest

from scripts.scrapers.base import Movie, ScraperConfig


PROFILE_URL = "https://www.senscritique.com/someone/collection?universe=1"


def _listing_item(href: str, text: str, badge: str | None = None) -> str:
    rating = f'<div data-testid="Rating">{badge}</div>' if badge is not None else ""
    return (
        '<div class="sc-86ec7c44-5 jwrjNN">'
        f'<a data-testid="product-title" href="{href}">{text}</a>'
        f"{rating}"
        "</div>"
    )


def build_listing_html(items, apollo_state=None, raw_next_data=None) -> str:
    """Assemble a minimal listing page with optional __NEXT_DATA__ payload."""
    if raw_next_data is not None:
        script = f'<script id="__NEXT_DATA__" type="application/json">{raw_next_data}</script>'
    elif apollo_state is not None:
        payload = {"props": {"pageProps": {"__APOLLO_STATE__": apollo_state}}}
        script = f'<script id="__NEXT_DATA__" type="application/json">{json.dumps(payload)}</script>'
    else:
        script = ""
    body = "".join(_listing_item(*item) for item in items)
    return f"<html><head></head><body><main>{body}</main>{script}</body></html>"


@pytest.fixture
def fast_config(tmp_path):
    """Scraper config with every pause disabled."""
    return ScraperConfig(
        output_path=tmp_path / "letterboxd-import.csv",
        page_load_wait=0,
        next_page_delay=0,
        settle_wait=0,
        timeout_fallback_wait=0,
    )


@pytest.fixture
def sample_apollo_state():
    """Apollo cache for user 42 with ratings for films 101 and 102."""
    return {
        "Product:101": {"id": 101, "title": "Alien"},
        "ProductUserInfos:101_42": {"rating": 8, "isWished": False},
        "ProductUserInfos:102_42": {"rating": 10, "isWished": False},
        "ProductUserInfos:103_42": {"rating": None, "isWished": True},
    }


@pytest.fixture
def sample_listing_html(sample_apollo_state):
    """Listing page mixing cached ratings, badge-only ratings and unrated items."""
    return build_listing_html(
        [
            ("/film/alien/101", "Alien (1979)", "3"),
            ("/film/heat/102", "Heat (1995)"),
            ("/film/wishlisted/103", "Wishlisted (2001)"),
            ("/film/fallback/104", "Fallback Film", "7"),
        ],
        apollo_state=sample_apollo_state,
    )


@pytest.fixture
def sample_movies():
    """Extracted movies on the 1-10 scale."""
    return [
        Movie(title="Alien", year=1979, rating=8, url="https://www.senscritique.com/film/alien/101"),
        Movie(title="Heat", year=1995, rating=10, url="https://www.senscritique.com/film/heat/102"),
        Movie(title='Say "Hi", Bob', year=None, rating=5, url="https://www.senscritique.com/film/hi/105"),
        Movie(title="Brazil", year=1985, rating=8, url="https://www.senscritique.com/film/brazil/106"),
    ]


@pytest.fixture
def senscritique_export_csv(tmp_path):
    """A Senscritique export with qualifying, unrated, short and malformed rows."""
    path = tmp_path / "senscritique-movies.csv"
    path.write_text(
        "\n".join(
            [
                "Title,Year,SensCritiqueRating,Genre,LetterboxdRating",
                '"Alien",1979,8,Horror,4',
                '"Say ""Hi"", Bob",2001,7,Drama,3.5',
                "Unrated,2000,0,Drama,0",
                "",
                "Broken,1999",
                '"Bad"quote,2000,5,Drama,2.5',
                "Heat,,10,Crime,5.0",
            ]
        )
        + "\n",
        encoding="utf-8",
    )
    return path
