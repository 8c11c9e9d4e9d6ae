"""State transitions for the browser.

update() is a pure function of (state, event): it never performs I/O and
never mutates the state it is given. Network requests, the browser launch
and quitting come back as effect descriptors from state.py.
"""

import dataclasses
import logging

from .commands import CommandRegistry
from .constants import BrowserConstants
from .state import (ViewState, Screen, Pending, KeyPressed, Resized,
                    SearchCompleted, ArticleFetched, Article)

logger = logging.getLogger(__name__)

_registry = CommandRegistry()


def update(state: ViewState, event) -> tuple[ViewState, list]:
    """Apply one event and return the new state and requested effects."""
    state = dataclasses.replace(state)
    if isinstance(event, KeyPressed):
        effects = _registry.execute(state, event.key)
    elif isinstance(event, Resized):
        effects = _on_resize(state, event)
    elif isinstance(event, SearchCompleted):
        effects = _on_search_completed(state, event)
    elif isinstance(event, ArticleFetched):
        effects = _on_article_fetched(state, event)
    else:
        raise TypeError(f"Unknown event: {event!r}")
    return state, effects


def _is_stale(state: ViewState, request_id: int, kind: Pending) -> bool:
    if state.pending != kind or request_id != state.request_id:
        logger.debug(f"Dropping stale {kind.value} completion {request_id} (current {state.request_id})")
        return True
    return False


def _on_resize(state: ViewState, event: Resized) -> list:
    state.width = event.width
    state.height = event.height
    if state.article is not None:
        state.rewrap()
    return []


def _on_search_completed(state: ViewState, event: SearchCompleted) -> list:
    if _is_stale(state, event.request_id, Pending.SEARCH):
        return []
    state.pending = None
    if event.error is not None:
        state.status = BrowserConstants.ERROR_MESSAGE.format(event.error)
        state.input_focused = True
        return []
    state.results = tuple(event.results)
    state.result_cursor = 0
    state.status = BrowserConstants.FOUND_RESULTS_MESSAGE.format(len(state.results), event.term)
    # Nothing to pick from an empty list, so leave the query editable
    state.input_focused = not state.results
    return []


def _on_article_fetched(state: ViewState, event: ArticleFetched) -> list:
    if _is_stale(state, event.request_id, Pending.FETCH):
        return []
    state.pending = None
    if event.error is not None:
        state.status = BrowserConstants.ERROR_MESSAGE.format(event.error)
        return []
    state.clear_article()
    state.article = Article(event.title, event.content)
    state.rewrap()
    state.screen = Screen.ARTICLE
    state.status = BrowserConstants.DISPLAYING_MESSAGE.format(event.title)
    return []
