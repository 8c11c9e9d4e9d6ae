"""Error types raised by the wiki client and browser launcher."""

from typing import Optional


class WikiError(Exception):
    """Base class for request and decode failures."""


class TransportError(WikiError):
    """Connection failure or timeout."""


class HttpStatusError(WikiError):
    """The wiki answered with something other than 200 OK."""

    def __init__(self, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        self.reason = reason or ""
        super().__init__(f"API request failed with status code: {status_code} {self.reason}".rstrip())


class DecodeError(WikiError):
    """Malformed JSON, an API error payload, or no readable text."""


class LaunchError(Exception):
    """The system browser could not be started."""
