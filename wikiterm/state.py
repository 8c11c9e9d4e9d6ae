"""View state, events and effects for the browser.

The state is a record owned by the application loop. The update function
in controller.py copies it, applies one event to the copy and hands back
the new state together with effect descriptors that the loop performs
(network requests, browser launch, quit). The helper methods below mutate
in place and are only ever called on such a copy.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from .constants import BrowserConstants
from .keyboard import KeyEvent
from .text import (wrap_text, find_matches, find_url_spans, line_for_offset,
                   line_count, words_before_line, line_for_word, heading_lines)


class Screen(Enum):
    WIKI_SELECT = "wiki_select"
    SEARCH_RESULTS = "search_results"
    ARTICLE = "article"
    ARTICLE_SEARCH = "article_search"


class Pending(Enum):
    """Kind of request currently in flight."""
    SEARCH = "search"
    FETCH = "fetch"


@dataclass(frozen=True)
class SearchResult:
    title: str


@dataclass(frozen=True)
class Article:
    title: str
    content: str


@dataclass
class ViewState:
    screen: Screen = Screen.WIKI_SELECT
    wiki_options: tuple[str, ...] = BrowserConstants.WIKI_OPTIONS
    wiki_cursor: int = 0
    wiki: Optional[str] = None

    # Search results screen
    query_input: str = ""
    input_focused: bool = False
    results: tuple[SearchResult, ...] = ()
    result_cursor: int = 0
    selected_title: str = ""
    status: str = ""

    # Article screens
    article: Optional[Article] = None
    wrapped: str = ""
    url_spans: tuple[tuple[int, int], ...] = ()
    headings: frozenset[int] = frozenset()  # Wrapped line numbers of section headings
    scroll_offset: int = 0
    search_input: str = ""
    query: str = ""
    matches: tuple[int, ...] = ()
    current_match_index: int = 0

    # Terminal geometry
    width: int = 0
    height: int = 0

    # Requests
    pending: Optional[Pending] = None
    request_id: int = 0

    @property
    def viewport_height(self) -> int:
        return max(1, self.height - BrowserConstants.ARTICLE_CHROME_ROWS)

    @property
    def text_input_active(self) -> bool:
        """True when printable keys go to a text input."""
        return (self.screen == Screen.ARTICLE_SEARCH or
                (self.screen == Screen.SEARCH_RESULTS and self.input_focused))

    @property
    def max_scroll(self) -> int:
        return max(0, line_count(self.wrapped) - self.viewport_height)

    def scroll_to(self, line: int) -> None:
        """Set the top visible line, clamped to the content."""
        self.scroll_offset = min(max(0, line), self.max_scroll)

    def scroll_to_current_match(self) -> None:
        if self.matches:
            offset = self.matches[self.current_match_index]
            self.scroll_to(line_for_offset(self.wrapped, offset))

    def rewrap(self) -> None:
        """Rebuild the wrapped buffer and every offset that indexes into it.

        Always starts from the raw article content, so repeated resizes do
        not drift. The first word on the top line stays at the top.
        """
        top_word = words_before_line(self.wrapped, self.scroll_offset) if self.wrapped else 0
        content = self.article.content if self.article else ""
        self.wrapped = wrap_text(content, self.width)
        self.url_spans = tuple(find_url_spans(self.wrapped))
        self.headings = heading_lines(content, self.width)
        self.matches = tuple(find_matches(self.wrapped, self.query))
        if self.matches:
            self.current_match_index = min(self.current_match_index, len(self.matches) - 1)
        else:
            self.current_match_index = 0
        self.scroll_to(line_for_word(self.wrapped, top_word) if top_word else 0)

    def clear_article(self) -> None:
        self.article = None
        self.wrapped = ""
        self.url_spans = ()
        self.headings = frozenset()
        self.scroll_offset = 0
        self.search_input = ""
        self.query = ""
        self.matches = ()
        self.current_match_index = 0


# Events delivered to the update function

@dataclass(frozen=True)
class KeyPressed:
    key: KeyEvent


@dataclass(frozen=True)
class Resized:
    width: int
    height: int


@dataclass(frozen=True)
class SearchCompleted:
    request_id: int
    term: str
    results: tuple[SearchResult, ...] = ()
    error: Optional[str] = None


@dataclass(frozen=True)
class ArticleFetched:
    request_id: int
    title: str
    content: str = ""
    error: Optional[str] = None


Event = Union[KeyPressed, Resized, SearchCompleted, ArticleFetched]


# Effects requested by the update function

@dataclass(frozen=True)
class RunSearch:
    request_id: int
    term: str
    wiki: str


@dataclass(frozen=True)
class FetchArticle:
    request_id: int
    title: str
    wiki: str


@dataclass(frozen=True)
class OpenInBrowser:
    url: str


@dataclass(frozen=True)
class Quit:
    pass


Effect = Union[RunSearch, FetchArticle, OpenInBrowser, Quit]

