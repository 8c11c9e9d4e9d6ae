"""MediaWiki API client for searching and fetching articles."""

from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from .constants import BrowserConstants
from .errors import DecodeError, HttpStatusError, TransportError
from .extract import readable_text
from .state import Article, SearchResult

logger = logging.getLogger(__name__)


def _source(wiki: str) -> tuple[str, str]:
    # Unknown names fall back to Wikipedia
    sources = BrowserConstants.WIKI_SOURCES
    return sources.get(wiki, sources["wikipedia"])


def article_url(title: str, wiki: str) -> str:
    """Return the public page URL for an article title."""
    _, page_base = _source(wiki)
    return page_base + title.replace(" ", "_")


class WikiClient:
    """Searches a MediaWiki site and fetches article text.

    All failures are raised as WikiError subclasses:
    - TransportError: connection failure or timeout
    - HttpStatusError: any response other than 200
    - DecodeError: malformed JSON, an API error payload, or no readable text
    """

    def __init__(self, session: Optional[requests.Session] = None,
                 timeout: float = BrowserConstants.REQUEST_TIMEOUT) -> None:
        self._session = session or requests.Session()
        self._session.headers.update({"User-Agent": BrowserConstants.USER_AGENT})
        self._timeout = timeout

    def _get_json(self, wiki: str, params: dict[str, str]) -> dict[str, Any]:
        api_url, _ = _source(wiki)
        logger.debug(f"GET {api_url} {params}")
        try:
            resp = self._session.get(api_url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise TransportError(str(e)) from e

        if resp.status_code != 200:
            raise HttpStatusError(resp.status_code, resp.reason)
        try:
            data = resp.json()
        except ValueError as e:
            raise DecodeError(f"failed to parse API response: {e}") from e
        if not isinstance(data, dict):
            raise DecodeError("failed to parse API response: expected a JSON object")
        if "error" in data:
            err = data["error"]
            info = err.get("info") or err.get("code") if isinstance(err, dict) else err
            raise DecodeError(f"API error: {info}")
        return data

    def search(self, term: str, wiki: str) -> list[SearchResult]:
        """Full-text search; results keep the server's order."""
        data = self._get_json(wiki, {
            "action": "query",
            "format": "json",
            "list": "search",
            "srsearch": term,
        })
        try:
            hits = data["query"]["search"]
            return [SearchResult(title=hit["title"]) for hit in hits]
        except (KeyError, TypeError) as e:
            raise DecodeError(f"failed to parse API response: missing {e}") from e

    def fetch_article(self, title: str, wiki: str) -> Article:
        """Fetch an article and reduce its HTML to readable plain text."""
        data = self._get_json(wiki, {
            "action": "parse",
            "format": "json",
            "page": title,
        })
        try:
            html = data["parse"]["text"]["*"]
        except (KeyError, TypeError) as e:
            raise DecodeError(f"failed to parse article response: missing {e}") from e
        return Article(title=title, content=readable_text(html))
