"""Text reflow and matching for article display."""

import re

from .constants import BrowserConstants

_URL_RE = re.compile(BrowserConstants.URL_PATTERN)


def wrap_text(text: str, width: int) -> str:
    """Reflow text so no line is wider than width.

    Each newline-separated line is wrapped on its own with a greedy word
    wrap; blank lines stay blank so paragraph breaks survive. A word longer
    than width is placed on its own line without being split. Every output
    line ends with a newline. A non-positive width returns text unchanged.
    """
    if width <= 0:
        return text

    out: list[str] = []
    for line in text.split("\n"):
        words = line.split()
        if not words:
            out.append("\n")
            continue

        current_line = words[0]
        for word in words[1:]:
            if len(current_line) + 1 + len(word) > width:
                out.append(current_line + "\n")
                current_line = word
            else:
                current_line += " " + word
        out.append(current_line + "\n")
    return "".join(out)


def _fold(s: str) -> str:
    # Lowercase per character, keeping characters whose lowercase form has a
    # different length, so indexes into the result are indexes into s.
    return "".join(c if len(c.lower()) != 1 else c.lower() for c in s)


def find_matches(content: str, query: str) -> list[int]:
    """Return the start offsets of every case-insensitive occurrence of query.

    The scan resumes one character after each match start, so overlapping
    occurrences are all reported.
    """
    if not query:
        return []
    lower_content = _fold(content)
    lower_query = _fold(query)
    matches = []
    start = 0
    while True:
        i = lower_content.find(lower_query, start)
        if i == -1:
            break
        matches.append(i)
        start = i + 1
    return matches


def find_url_spans(text: str) -> list[tuple[int, int]]:
    """Return half-open (start, end) spans of URLs in text.

    Sentence punctuation after a URL is not part of it, and neither is a
    closing parenthesis without a matching opening one inside the URL, so
    "(https://go.dev)." yields just the address while
    "https://en.wikipedia.org/wiki/Go_(game)" is kept whole.
    """
    spans = []
    for m in _URL_RE.finditer(text):
        start, end = m.span()
        while end > start:
            ch = text[end - 1]
            if ch in BrowserConstants.URL_TRAILING_PUNCTUATION:
                end -= 1
            elif ch == ")" and text.count("(", start, end) < text.count(")", start, end):
                end -= 1
            else:
                break
        spans.append((start, end))
    return spans


def line_for_offset(text: str, offset: int) -> int:
    """Return the 0-based line number containing a character offset."""
    return text.count("\n", 0, offset)


def line_count(text: str) -> int:
    return len(text.splitlines())


def words_before_line(text: str, line: int) -> int:
    """Count the words that appear before the given line."""
    return sum(len(l.split()) for l in text.splitlines()[:line])


def line_for_word(text: str, word_index: int) -> int:
    """Return the line holding the word with the given index.

    Used to keep the same word at the top of the viewport when wrapped text
    is rebuilt at another width. Blank lines directly above the word are
    skipped over, so the word itself ends up first.
    """
    seen = 0
    lines = text.splitlines()
    for i, l in enumerate(lines):
        seen += len(l.split())
        if seen > word_index:
            return i
    return max(0, len(lines) - 1)


def heading_lines(text: str, width: int) -> frozenset[int]:
    """Return the wrapped line numbers that belong to all-caps source lines.

    Headings are judged on the unwrapped lines, so a capitalised word that
    merely lands on a line of its own after wrapping is not one.
    """
    out = set()
    line_no = 0
    for line in text.split("\n"):
        n = wrap_text(line, width).count("\n") if width > 0 else 1
        if line.strip().isupper():
            out.update(range(line_no, line_no + n))
        line_no += n
    return frozenset(out)
