"""Open URLs in the system web browser."""

import logging
import subprocess
import sys
import webbrowser

from .errors import LaunchError

logger = logging.getLogger(__name__)


class BrowserLauncher:
    """Starts the platform's URL opener without waiting for it.

    Uses xdg-open on Linux, open on macOS and start on Windows; other
    platforms go through the webbrowser module.
    """

    @staticmethod
    def _command(url: str):
        if sys.platform.startswith('linux'):
            return ['xdg-open', url]
        if sys.platform == 'darwin':
            return ['open', url]
        if sys.platform == 'win32':
            return ['cmd', '/c', 'start', '', url]
        return None

    @staticmethod
    def launch(url: str) -> None:
        """Start the opener.

        Raises:
            LaunchError: if the opener could not be started.
        """
        cmd = BrowserLauncher._command(url)
        if cmd is None:
            if not webbrowser.open(url):
                raise LaunchError(f"No browser available for {url}")
            return
        try:
            subprocess.Popen(cmd, stdin=subprocess.DEVNULL,
                             stdout=subprocess.DEVNULL,
                             stderr=subprocess.DEVNULL)
        except OSError as e:
            raise LaunchError(f"Could not run {cmd[0]}: {e}") from e


def open_url(url: str) -> None:
    """Best-effort launch; failures are logged and otherwise ignored."""
    try:
        BrowserLauncher.launch(url)
    except LaunchError as e:
        logger.warning(f"Browser launch failed: {e}")
