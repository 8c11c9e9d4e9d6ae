"""Terminal interface using Blessed for display and Curtsies for input."""

import select
import sys
from typing import Optional

import blessed
from curtsies import Input

from .highlight import Segment, Style
from .view import Frame


class TerminalInterface:
    """Handles terminal I/O using Blessed."""

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._input: Optional[Input] = None
        # Virtual screen state for minimal updates
        self._last_rows: Optional[list[str]] = None
        self._last_size: Optional[tuple[int, int]] = None

    def setup(self):
        """Enter fullscreen mode and start raw keyboard input."""
        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._input is None:
            self._input = Input(keynames='curtsies')
            self._input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._input is not None:
            try:
                self._input.__exit__(None, None, None)
            finally:
                self._input = None
        if self.is_fullscreen:
            print(self.term.normal_cursor, end='')
            print(self.term.exit_fullscreen, end='', flush=True)
            self.is_fullscreen = False

    def invalidate_frame(self) -> None:
        """Forget the last frame so the next update repaints everything."""
        self._last_rows = None
        self._last_size = None

    def _style(self, style: Style) -> str:
        """Return the escape sequence that starts a style."""
        t = self.term
        if style == Style.SEARCH_MATCH:
            return t.black_on_yellow
        if style == Style.CURRENT_MATCH:
            return t.black_on_bright_yellow + t.bold
        if style == Style.URL:
            return t.bright_blue + t.underline
        if style == Style.HEADING:
            return t.bold
        if style == Style.TITLE:
            return t.bold_cyan
        if style == Style.SELECTED:
            return t.bold_green
        return ''

    def compose_row(self, segments: list[Segment], width: int) -> str:
        """Render one row of segments, truncated and padded to width."""
        out = []
        used = 0
        for seg in segments:
            if used >= width:
                break
            text = seg.text[:width - used]
            start = self._style(seg.style)
            if start:
                out.append(start + text + self.term.normal)
            else:
                out.append(text)
            used += len(text)
        out.append(' ' * (width - used))
        return ''.join(out)

    def update_frame(self, frame: Frame) -> None:
        """Diff against last frame and write only changed rows.

        Falls back to a full clear on first paint or when the terminal size
        changes.
        """
        width, height = self.term.width, self.term.height
        if self._last_rows is None or self._last_size != (width, height):
            print(self.term.home + self.term.clear, end='')
            self._last_rows = ["" for _ in range(height)]
            self._last_size = (width, height)

        for y, row in enumerate(frame.rows[:height]):
            disp = self.compose_row(row, width)
            if disp != self._last_rows[y]:
                print(self.term.move(y, 0) + disp, end='')
                self._last_rows[y] = disp

        if frame.cursor is not None:
            y, x = frame.cursor
            print(self.term.move(y, min(x, width - 1)) + self.term.normal_cursor, end='', flush=True)
        else:
            print(self.term.hide_cursor, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name, or None if nothing arrived in time.
        """
        if self._input is None:
            return None
        if timeout is not None:
            r, _, _ = select.select([sys.stdin], [], [], float(timeout))
            if not r:
                return None
        evt = next(self._input)
        return str(evt)

    @property
    def width(self):
        """Terminal width in columns."""
        return self.term.width

    @property
    def height(self):
        """Terminal height in rows."""
        return self.term.height
