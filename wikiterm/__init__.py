"""Wikiterm - A terminal browser for MediaWiki sites."""

import logging

from .browser import WikiBrowser
from .state import ViewState, Screen
from .wiki import WikiClient

# The browser owns the whole screen; log output goes nowhere unless the
# embedding application configures a handler.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    'WikiBrowser',
    'ViewState',
    'Screen',
    'WikiClient',
]
