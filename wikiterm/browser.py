"""Main browser loop tying terminal, state and background requests together."""

import logging
import os
import select
import signal

from .constants import BrowserConstants
from .controller import update
from .keyboard import KeyboardHandler, KeyEvent, KeyType
from .launcher import open_url
from .state import (ViewState, KeyPressed, Resized, RunSearch, FetchArticle,
                    OpenInBrowser, Quit)
from .tasks import TaskRunner
from .terminal import TerminalInterface
from .view import compose_frame

logger = logging.getLogger(__name__)


class WikiBrowser:
    """Terminal wiki browser.

    The loop blocks in select() on stdin and a wake pipe. SIGWINCH, SIGINT
    and finished background requests all write a byte to the pipe, so every
    state change happens on this thread.
    """

    def __init__(self, terminal=None, tasks=None):
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.state = ViewState()
        self.running = False
        # Create pipe for resize and completion signaling
        self._wake_pipe_r, self._wake_pipe_w = os.pipe()
        self.tasks = tasks or TaskRunner(wake_fd=self._wake_pipe_w)
        self._ctrl_c_pressed = False

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame  # Unused
        os.write(self._wake_pipe_w, BrowserConstants.RESIZE_PIPE_MARKER)

    def _handle_sigint(self, signum, frame):
        """Handle SIGINT (Ctrl-C) as a key press."""
        del signum, frame  # Unused
        self._ctrl_c_pressed = True
        os.write(self._wake_pipe_w, b'C')

    def dispatch(self, event) -> None:
        """Feed one event through update() and perform the effects."""
        self.state, effects = update(self.state, event)
        for effect in effects:
            self._perform(effect)

    def _perform(self, effect) -> None:
        if isinstance(effect, (RunSearch, FetchArticle)):
            self.tasks.submit(effect)
        elif isinstance(effect, OpenInBrowser):
            logger.debug(f"Opening {effect.url} in the system browser")
            open_url(effect.url)
        elif isinstance(effect, Quit):
            self.running = False
        else:
            raise TypeError(f"Unknown effect: {effect!r}")

    def _draw(self):
        """Draw the current state to the terminal."""
        self.terminal.update_frame(compose_frame(self.state))

    def _resize(self):
        self.terminal.invalidate_frame()
        self.dispatch(Resized(self.terminal.width, self.terminal.height))

    def run(self):
        """Run the main browser loop."""
        self.terminal.setup()
        self.running = True

        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        original_int_handler = signal.signal(signal.SIGINT, self._handle_sigint)

        try:
            with self.terminal.term.cbreak():
                self._resize()
                need_draw = True

                while self.running:
                    if need_draw:
                        self._draw()
                        need_draw = False

                    # Wait for input on stdin or the wake pipe
                    ready, _, _ = select.select([0, self._wake_pipe_r], [], [])

                    if self._wake_pipe_r in ready:
                        data = os.read(self._wake_pipe_r, 1024)
                        if self._ctrl_c_pressed:
                            self._ctrl_c_pressed = False
                            self.dispatch(KeyPressed(KeyEvent(
                                key_type=KeyType.CTRL, value='c', raw='\x03', is_ctrl=True)))
                        if BrowserConstants.RESIZE_PIPE_MARKER in data:
                            self._resize()
                        for message in self.tasks.drain():
                            self.dispatch(message)
                        need_draw = True
                    elif 0 in ready:
                        # Non-blocking since select says it's ready
                        key_event = self.keyboard.get_key_event(timeout=0)
                        if key_event:
                            self.dispatch(KeyPressed(key_event))
                            need_draw = True

        except KeyboardInterrupt:
            pass
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            signal.signal(signal.SIGINT, original_int_handler)
            # Threads still running must not write to a closed pipe
            self.tasks.detach()
            os.close(self._wake_pipe_r)
            os.close(self._wake_pipe_w)
            self.terminal.cleanup()
