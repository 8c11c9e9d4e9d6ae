"""Compose the screen for a view state.

Produces rows of styled segments; terminal.py turns them into escape
sequences. Nothing here touches the terminal, so layouts can be tested as
plain data.
"""

from dataclasses import dataclass, field
from typing import Optional

from .constants import BrowserConstants
from .highlight import Segment, Style, plan_segments, split_lines
from .state import Screen, ViewState

Row = list[Segment]

WIKI_SELECT_HELP = "Press Enter to select, 'q' to quit."
RESULTS_HELP = ("Enter to search/select, Up/Down to navigate, Tab to switch focus, "
                "'o' to open in browser, 'q' to quit.")
ARTICLE_HELP = ("Press 'esc' to go back, Up/Down to scroll, '/' to search, "
                "'n/p' to jump between matches, 'q' to quit.")
ARTICLE_SEARCH_HELP = "Press Enter to search, Esc to cancel."


@dataclass
class Frame:
    rows: list[Row] = field(default_factory=list)
    cursor: Optional[tuple[int, int]] = None  # (row, column) of a visible text cursor


def _text(s: str, style: Style = Style.DEFAULT) -> Row:
    return [Segment(s, style)] if s else []


def _fit(rows: list[Row], height: int) -> list[Row]:
    rows = rows[:height]
    return rows + [[] for _ in range(height - len(rows))]


def compose_frame(state: ViewState) -> Frame:
    if state.screen == Screen.WIKI_SELECT:
        return _wiki_select(state)
    if state.screen == Screen.SEARCH_RESULTS:
        return _search_results(state)
    return _article(state)


def _wiki_select(state: ViewState) -> Frame:
    rows = [_text("Select a Wiki to Search:"), []]
    for i, wiki in enumerate(state.wiki_options):
        if i == state.wiki_cursor:
            rows.append([Segment(">", Style.SELECTED), Segment(" " + wiki)])
        else:
            rows.append(_text("  " + wiki))
    rows += [[], [], _text(WIKI_SELECT_HELP)]
    return Frame(_fit(rows, state.height))


def _search_results(state: ViewState) -> Frame:
    prompt = "> "
    if state.query_input or state.input_focused:
        input_row = _text(prompt + state.query_input)
    else:
        input_row = _text(prompt + BrowserConstants.QUERY_PLACEHOLDER)
    rows = [input_row, [], _text(state.status), []]

    if state.results:
        rows.append(_text("Search Results:"))
        # Keep the cursor visible when the list is taller than the screen
        room = max(1, state.height - len(rows) - 2)
        first = max(0, state.result_cursor - room + 1)
        for i, result in enumerate(state.results[first:first + room], start=first):
            if i == state.result_cursor:
                rows.append([Segment("> ", Style.SELECTED), Segment(result.title)])
            else:
                rows.append(_text("  " + result.title))

    rows = _fit(rows, max(0, state.height - 1))
    rows.append(_text(RESULTS_HELP))
    cursor = (0, len(prompt) + len(state.query_input)) if state.input_focused else None
    return Frame(rows, cursor)


def article_rows(state: ViewState) -> list[Row]:
    """Return the visible window of highlighted article lines."""
    segments = plan_segments(state.wrapped, state.query, state.matches,
                             state.current_match_index, state.url_spans)
    lines = split_lines(segments)
    visible = lines[state.scroll_offset:state.scroll_offset + state.viewport_height]
    out = []
    for line_no, line in enumerate(visible, start=state.scroll_offset):
        if line_no in state.headings:
            line = [Segment(seg.text, Style.HEADING) if seg.style == Style.DEFAULT else seg
                    for seg in line]
        out.append(line)
    return out


def _article(state: ViewState) -> Frame:
    rows = [_text(state.selected_title, Style.TITLE), []]
    rows += _fit(article_rows(state), state.viewport_height)
    cursor = None
    if state.screen == Screen.ARTICLE_SEARCH:
        prompt = "/" + state.search_input
        rows.append(_text(prompt + "  " + ARTICLE_SEARCH_HELP))
        cursor = (len(rows) - 1, len(prompt))
    else:
        rows.append(_text(ARTICLE_HELP))
    rows.append(_text(state.status))
    return Frame(_fit(rows, state.height), cursor)
