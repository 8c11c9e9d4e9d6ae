"""Merge search-match and URL spans into a rendering plan."""

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class Style(Enum):
    """Display styles for text segments."""
    DEFAULT = "default"
    SEARCH_MATCH = "search_match"
    CURRENT_MATCH = "current_match"
    URL = "url"
    # Screen chrome
    HEADING = "heading"
    TITLE = "title"
    SELECTED = "selected"


@dataclass(frozen=True)
class Span:
    """Half-open [start, end) range of the wrapped buffer."""
    start: int
    end: int
    kind: Style


@dataclass(frozen=True)
class Segment:
    text: str
    style: Style = Style.DEFAULT


def build_spans(query: str, search_matches: Sequence[int], current_match_index: int,
                url_spans: Sequence[tuple[int, int]]) -> list[Span]:
    """Tag search offsets and URL ranges and order them by start.

    The sort is stable, so at equal starts search spans stay ahead of URL
    spans.
    """
    spans = []
    for i, start in enumerate(search_matches):
        kind = Style.CURRENT_MATCH if i == current_match_index else Style.SEARCH_MATCH
        spans.append(Span(start, start + len(query), kind))
    for start, end in url_spans:
        spans.append(Span(start, end, Style.URL))
    spans.sort(key=lambda s: s.start)
    return spans


def plan_segments(content: str, query: str, search_matches: Sequence[int],
                  current_match_index: int,
                  url_spans: Sequence[tuple[int, int]]) -> list[Segment]:
    """Cover content with styled segments, in order, without gaps or overlaps.

    Spans that overlap one already emitted are clipped to start where the
    previous one ended; spans left empty by clipping are dropped.
    """
    segments: list[Segment] = []
    pos = 0
    for span in build_spans(query, search_matches, current_match_index, url_spans):
        start = max(span.start, pos)
        end = min(span.end, len(content))
        if start >= end:
            continue
        if start > pos:
            segments.append(Segment(content[pos:start]))
        segments.append(Segment(content[start:end], span.kind))
        pos = end
    if pos < len(content):
        segments.append(Segment(content[pos:]))
    return segments


def split_lines(segments: Sequence[Segment]) -> list[list[Segment]]:
    """Break a plan into per-line segment lists, dropping the newlines.

    A trailing newline does not open an extra empty line, matching
    str.splitlines() on the underlying text.
    """
    lines: list[list[Segment]] = [[]]
    for seg in segments:
        parts = seg.text.split("\n")
        for i, part in enumerate(parts):
            if i > 0:
                lines.append([])
            if part:
                lines[-1].append(Segment(part, seg.style))
    if len(lines) > 1 and not lines[-1]:
        lines.pop()
    return lines
