"""Background requests that report back to the event loop.

Each request runs on its own daemon thread and produces exactly one
completion message. Messages go on a queue, and a marker byte is written to
the loop's wake pipe so a blocking select() returns. Tasks never touch the
view state.
"""

import logging
import os
import queue
import threading
from typing import Optional

from .constants import BrowserConstants
from .errors import WikiError
from .state import RunSearch, FetchArticle, SearchCompleted, ArticleFetched
from .wiki import WikiClient

logger = logging.getLogger(__name__)


class TaskRunner:
    """Runs wiki requests off the main loop."""

    def __init__(self, wake_fd: Optional[int] = None, client: Optional[WikiClient] = None):
        self.messages: "queue.Queue" = queue.Queue()
        self._wake_fd = wake_fd
        self.client = client or WikiClient()

    def submit(self, effect) -> threading.Thread:
        """Start a thread for a RunSearch or FetchArticle effect."""
        if isinstance(effect, RunSearch):
            target = self._run_search
        elif isinstance(effect, FetchArticle):
            target = self._run_fetch
        else:
            raise TypeError(f"Not a request effect: {effect!r}")
        thread = threading.Thread(target=target, args=(effect,), daemon=True)
        thread.start()
        return thread

    def drain(self) -> list:
        """Return every completion message posted so far."""
        out = []
        while True:
            try:
                out.append(self.messages.get_nowait())
            except queue.Empty:
                return out

    def detach(self) -> None:
        """Stop waking the loop; later messages are only queued."""
        self._wake_fd = None

    def _post(self, message) -> None:
        self.messages.put(message)
        if self._wake_fd is not None:
            try:
                os.write(self._wake_fd, BrowserConstants.MESSAGE_PIPE_MARKER)
            except OSError as e:
                # Pipe closed: the loop has already exited
                logger.debug(f"Could not wake event loop: {e}")

    def _run_search(self, effect: RunSearch) -> None:
        logger.debug(f"Search {effect.request_id}: {effect.term!r} on {effect.wiki}")
        try:
            results = self.client.search(effect.term, effect.wiki)
        except WikiError as e:
            logger.warning(f"Search for {effect.term!r} failed: {e}")
            self._post(SearchCompleted(effect.request_id, effect.term, error=str(e)))
            return
        except Exception as e:
            # The loop waits for exactly one completion per request
            logger.exception(f"Search for {effect.term!r} crashed")
            self._post(SearchCompleted(effect.request_id, effect.term, error=str(e)))
            return
        self._post(SearchCompleted(effect.request_id, effect.term, results=tuple(results)))

    def _run_fetch(self, effect: FetchArticle) -> None:
        logger.debug(f"Fetch {effect.request_id}: {effect.title!r} on {effect.wiki}")
        try:
            article = self.client.fetch_article(effect.title, effect.wiki)
        except WikiError as e:
            logger.warning(f"Fetch of {effect.title!r} failed: {e}")
            self._post(ArticleFetched(effect.request_id, effect.title, error=str(e)))
            return
        except Exception as e:
            logger.exception(f"Fetch of {effect.title!r} crashed")
            self._post(ArticleFetched(effect.request_id, effect.title, error=str(e)))
            return
        self._post(ArticleFetched(effect.request_id, article.title, content=article.content))
