"""Command pattern implementation for key handling."""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Tuple, Optional, TYPE_CHECKING

from .constants import BrowserConstants
from .keyboard import KeyType
from .state import (Screen, Pending, RunSearch, FetchArticle, OpenInBrowser, Quit)
from .text import find_matches
from .wiki import article_url

if TYPE_CHECKING:
    from .keyboard import KeyEvent
    from .state import ViewState

logger = logging.getLogger(__name__)


class Context(Enum):
    """Where key presses go: a screen, refined by input focus."""
    WIKI_SELECT = "wiki_select"
    QUERY_INPUT = "query_input"
    RESULT_LIST = "result_list"
    ARTICLE = "article"
    ARTICLE_SEARCH = "article_search"


def context_for(state: 'ViewState') -> Context:
    if state.screen == Screen.WIKI_SELECT:
        return Context.WIKI_SELECT
    if state.screen == Screen.SEARCH_RESULTS:
        return Context.QUERY_INPUT if state.input_focused else Context.RESULT_LIST
    if state.screen == Screen.ARTICLE_SEARCH:
        return Context.ARTICLE_SEARCH
    return Context.ARTICLE


class BrowserCommand(ABC):
    """Base class for browser commands."""

    @abstractmethod
    def execute(self, state: 'ViewState', key_event: 'KeyEvent') -> list:
        """Execute the command against a state copy.

        Args:
            state: The state copy to modify in place
            key_event: The key event that triggered this command

        Returns:
            Effects for the application loop to perform
        """
        pass


class QuitCommand(BrowserCommand):
    def execute(self, state, key_event):
        return [Quit()]


# --- Wiki selection ---

class WikiCursorCommand(BrowserCommand):
    def __init__(self, delta: int):
        self.delta = delta

    def execute(self, state, key_event):
        last = len(state.wiki_options) - 1
        state.wiki_cursor = min(max(0, state.wiki_cursor + self.delta), last)
        return []


class SelectWikiCommand(BrowserCommand):
    def execute(self, state, key_event):
        wiki = state.wiki_options[state.wiki_cursor]
        if wiki != state.wiki:
            state.results = ()
            state.result_cursor = 0
            state.status = ""
        state.wiki = wiki
        state.screen = Screen.SEARCH_RESULTS
        state.input_focused = True
        return []


# --- Search results ---

class ResultCursorCommand(BrowserCommand):
    def __init__(self, delta: int):
        self.delta = delta

    def execute(self, state, key_event):
        if state.results:
            last = len(state.results) - 1
            state.result_cursor = min(max(0, state.result_cursor + self.delta), last)
        return []


class SubmitQueryCommand(BrowserCommand):
    def execute(self, state, key_event):
        term = state.query_input
        if not term:
            return []
        if state.pending is not None:
            state.status = BrowserConstants.BUSY_MESSAGE
            return []
        state.request_id += 1
        state.pending = Pending.SEARCH
        state.status = BrowserConstants.SEARCHING_MESSAGE
        state.input_focused = False
        return [RunSearch(state.request_id, term, state.wiki)]


class OpenResultCommand(BrowserCommand):
    def execute(self, state, key_event):
        if not state.results:
            return []
        if state.pending is not None:
            state.status = BrowserConstants.BUSY_MESSAGE
            return []
        state.selected_title = state.results[state.result_cursor].title
        state.request_id += 1
        state.pending = Pending.FETCH
        state.status = BrowserConstants.FETCHING_MESSAGE
        return [FetchArticle(state.request_id, state.selected_title, state.wiki)]


class OpenInBrowserCommand(BrowserCommand):
    """Hand the selected result to the system browser and exit."""

    def execute(self, state, key_event):
        if not state.results:
            return []
        title = state.results[state.result_cursor].title
        return [OpenInBrowser(article_url(title, state.wiki)), Quit()]


class FocusInputCommand(BrowserCommand):
    def execute(self, state, key_event):
        state.input_focused = True
        return []


class FocusResultsCommand(BrowserCommand):
    def execute(self, state, key_event):
        if state.results:
            state.input_focused = False
        return []


class BackToWikiSelectCommand(BrowserCommand):
    def execute(self, state, key_event):
        if state.pending is not None:
            logger.debug(f"Abandoning pending {state.pending.value} request {state.request_id}")
            state.pending = None
            state.request_id += 1
            state.status = ""
        state.screen = Screen.WIKI_SELECT
        state.input_focused = False
        return []


# --- Article ---

class BackToResultsCommand(BrowserCommand):
    def execute(self, state, key_event):
        state.clear_article()
        state.screen = Screen.SEARCH_RESULTS
        state.input_focused = not state.results
        state.status = ""
        return []


class StartArticleSearchCommand(BrowserCommand):
    def execute(self, state, key_event):
        state.screen = Screen.ARTICLE_SEARCH
        state.search_input = state.query
        return []


class SubmitArticleSearchCommand(BrowserCommand):
    def execute(self, state, key_event):
        state.query = state.search_input
        state.matches = tuple(find_matches(state.wrapped, state.query))
        state.current_match_index = 0
        state.screen = Screen.ARTICLE
        if not state.query:
            state.status = BrowserConstants.DISPLAYING_MESSAGE.format(state.selected_title)
        elif state.matches:
            state.status = BrowserConstants.MATCHES_MESSAGE.format(len(state.matches), state.query)
            state.scroll_to_current_match()
        else:
            state.status = BrowserConstants.NO_MATCHES_MESSAGE.format(state.query)
        return []


class NextMatchCommand(BrowserCommand):
    def execute(self, state, key_event):
        if state.matches:
            state.current_match_index = (state.current_match_index + 1) % len(state.matches)
            state.scroll_to_current_match()
        return []


class PrevMatchCommand(BrowserCommand):
    def execute(self, state, key_event):
        if state.matches:
            n = len(state.matches)
            state.current_match_index = (state.current_match_index - 1 + n) % n
            state.scroll_to_current_match()
        return []


class ScrollCommand(BrowserCommand):
    """Scroll by lines; page fractions are resolved against the viewport."""

    def __init__(self, lines: int = 0, pages: float = 0.0):
        self.lines = lines
        self.pages = pages

    def execute(self, state, key_event):
        delta = self.lines + int(self.pages * state.viewport_height)
        state.scroll_to(state.scroll_offset + delta)
        return []


class ScrollHomeCommand(BrowserCommand):
    def execute(self, state, key_event):
        state.scroll_to(0)
        return []


class ScrollEndCommand(BrowserCommand):
    def execute(self, state, key_event):
        state.scroll_to(state.max_scroll)
        return []


# --- Text inputs ---

class InputBackspaceCommand(BrowserCommand):
    def execute(self, state, key_event):
        if state.screen == Screen.ARTICLE_SEARCH:
            state.search_input = state.search_input[:-1]
        else:
            state.query_input = state.query_input[:-1]
        return []


class InsertTextCommand(BrowserCommand):
    def execute(self, state, key_event):
        char = key_event.value
        # Filter out control characters
        if not char or ord(char[0]) < 32:
            return []
        if state.screen == Screen.ARTICLE_SEARCH:
            if len(state.search_input) < BrowserConstants.ARTICLE_QUERY_CHAR_LIMIT:
                state.search_input += char
        elif len(state.query_input) < BrowserConstants.QUERY_CHAR_LIMIT:
            state.query_input += char
        return []


class CommandRegistry:
    """Registry for mapping (context, key) combinations to commands."""

    def __init__(self):
        self._commands: Dict[Tuple[Context, KeyType, str], BrowserCommand] = {}
        self._setup_default_commands()

    def _setup_default_commands(self):
        """Set up the default command mappings."""
        quit_cmd = QuitCommand()
        for ctx in Context:
            self.register(ctx, (KeyType.CTRL, 'c'), quit_cmd)
        for ctx in (Context.WIKI_SELECT, Context.RESULT_LIST, Context.ARTICLE):
            self.register(ctx, (KeyType.REGULAR, 'q'), quit_cmd)

        # Wiki selection
        up, down = WikiCursorCommand(-1), WikiCursorCommand(1)
        self.register(Context.WIKI_SELECT, (KeyType.SPECIAL, 'up'), up)
        self.register(Context.WIKI_SELECT, (KeyType.REGULAR, 'k'), up)
        self.register(Context.WIKI_SELECT, (KeyType.SPECIAL, 'down'), down)
        self.register(Context.WIKI_SELECT, (KeyType.REGULAR, 'j'), down)
        self.register(Context.WIKI_SELECT, (KeyType.SPECIAL, 'enter'), SelectWikiCommand())
        self.register(Context.WIKI_SELECT, (KeyType.SPECIAL, 'escape'), quit_cmd)

        # Query input
        self.register(Context.QUERY_INPUT, (KeyType.SPECIAL, 'enter'), SubmitQueryCommand())
        self.register(Context.QUERY_INPUT, (KeyType.SPECIAL, 'tab'), FocusResultsCommand())
        self.register(Context.QUERY_INPUT, (KeyType.SPECIAL, 'down'), FocusResultsCommand())
        self.register(Context.QUERY_INPUT, (KeyType.SPECIAL, 'backspace'), InputBackspaceCommand())
        self.register(Context.QUERY_INPUT, (KeyType.SPECIAL, 'escape'), BackToWikiSelectCommand())

        # Result list
        up, down = ResultCursorCommand(-1), ResultCursorCommand(1)
        self.register(Context.RESULT_LIST, (KeyType.SPECIAL, 'up'), up)
        self.register(Context.RESULT_LIST, (KeyType.REGULAR, 'k'), up)
        self.register(Context.RESULT_LIST, (KeyType.SPECIAL, 'down'), down)
        self.register(Context.RESULT_LIST, (KeyType.REGULAR, 'j'), down)
        self.register(Context.RESULT_LIST, (KeyType.SPECIAL, 'enter'), OpenResultCommand())
        self.register(Context.RESULT_LIST, (KeyType.REGULAR, 'o'), OpenInBrowserCommand())
        self.register(Context.RESULT_LIST, (KeyType.SPECIAL, 'tab'), FocusInputCommand())
        self.register(Context.RESULT_LIST, (KeyType.REGULAR, '/'), FocusInputCommand())
        self.register(Context.RESULT_LIST, (KeyType.SPECIAL, 'escape'), BackToWikiSelectCommand())

        # Article
        back = BackToResultsCommand()
        self.register(Context.ARTICLE, (KeyType.SPECIAL, 'escape'), back)
        self.register(Context.ARTICLE, (KeyType.REGULAR, '/'), StartArticleSearchCommand())
        self.register(Context.ARTICLE, (KeyType.REGULAR, 'n'), NextMatchCommand())
        self.register(Context.ARTICLE, (KeyType.REGULAR, 'p'), PrevMatchCommand())
        line_up, line_down = ScrollCommand(lines=-1), ScrollCommand(lines=1)
        self.register(Context.ARTICLE, (KeyType.SPECIAL, 'up'), line_up)
        self.register(Context.ARTICLE, (KeyType.REGULAR, 'k'), line_up)
        self.register(Context.ARTICLE, (KeyType.SPECIAL, 'down'), line_down)
        self.register(Context.ARTICLE, (KeyType.REGULAR, 'j'), line_down)
        self.register(Context.ARTICLE, (KeyType.SPECIAL, 'page_up'), ScrollCommand(pages=-1))
        self.register(Context.ARTICLE, (KeyType.SPECIAL, 'page_down'), ScrollCommand(pages=1))
        self.register(Context.ARTICLE, (KeyType.REGULAR, ' '), ScrollCommand(pages=1))
        self.register(Context.ARTICLE, (KeyType.CTRL, 'u'), ScrollCommand(pages=-0.5))
        self.register(Context.ARTICLE, (KeyType.CTRL, 'd'), ScrollCommand(pages=0.5))
        self.register(Context.ARTICLE, (KeyType.SPECIAL, 'home'), ScrollHomeCommand())
        self.register(Context.ARTICLE, (KeyType.REGULAR, 'g'), ScrollHomeCommand())
        self.register(Context.ARTICLE, (KeyType.SPECIAL, 'end'), ScrollEndCommand())
        self.register(Context.ARTICLE, (KeyType.REGULAR, 'G'), ScrollEndCommand())

        # In-article search input
        self.register(Context.ARTICLE_SEARCH, (KeyType.SPECIAL, 'enter'), SubmitArticleSearchCommand())
        self.register(Context.ARTICLE_SEARCH, (KeyType.SPECIAL, 'backspace'), InputBackspaceCommand())
        self.register(Context.ARTICLE_SEARCH, (KeyType.SPECIAL, 'escape'), back)

    def register(self, context: Context, key: Tuple[KeyType, str], command: BrowserCommand):
        """Register a command for a key combination in a context."""
        self._commands[(context, key[0], key[1])] = command

    def get_command(self, context: Context, key_type: KeyType, value: str) -> Optional[BrowserCommand]:
        """Get the command for a key combination."""
        return self._commands.get((context, key_type, value))

    def execute(self, state: 'ViewState', key_event: 'KeyEvent') -> list:
        """Execute the command for the given key event.

        Returns:
            Effects requested by the command
        """
        context = context_for(state)
        command = self.get_command(context, key_event.key_type, key_event.value)
        if command:
            return command.execute(state, key_event)

        # Handle regular text input
        if key_event.key_type == KeyType.REGULAR and state.text_input_active:
            return InsertTextCommand().execute(state, key_event)

        return []
