"""Test keyboard input handling."""

import pytest
from wikiterm.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        """Add a key to the queue."""
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


def test_no_key_returns_none(handler):
    assert handler.get_key_event(timeout=0) is None


def test_queued_key_is_parsed():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)
    terminal.add_key('<UP>')
    terminal.add_key('x')
    assert handler.get_key_event().value == 'up'
    assert handler.get_key_event() == KeyEvent(KeyType.REGULAR, 'x', 'x')
    assert handler.get_key_event() is None


@pytest.mark.parametrize("token,value", [
    ('<UP>', 'up'),
    ('<DOWN>', 'down'),
    ('<HOME>', 'home'),
    ('<END>', 'end'),
    ('<PAGEUP>', 'page_up'),
    ('<PAGEDOWN>', 'page_down'),
    ('<BACKSPACE>', 'backspace'),
    ('<TAB>', 'tab'),
])
def test_named_special_keys(handler, token, value):
    event = handler.parse_key(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value


def test_escape(handler):
    for token in ('<ESC>', '\x1b'):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.SPECIAL
        assert event.value == 'escape'
        assert event.raw == '\x1b'


def test_enter_variants(handler):
    for token in ('\n', '\r', '<Ctrl-j>', '<Ctrl-m>'):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.SPECIAL
        assert event.value == 'enter'


def test_tab_variants(handler):
    for token in ('\t', '<Ctrl-i>'):
        assert handler.parse_key(token).value == 'tab'


def test_backspace_bytes(handler):
    for token in ('\x7f', '\x08'):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.SPECIAL
        assert event.value == 'backspace'


def test_ctrl_keys(handler):
    event = handler.parse_key('<Ctrl-c>')
    assert event.key_type == KeyType.CTRL
    assert event.value == 'c'
    assert event.is_ctrl

    event = handler.parse_key('\x04')  # Ctrl-D
    assert event.key_type == KeyType.CTRL
    assert event.value == 'd'
    assert event.is_ctrl


def test_alt_keys(handler):
    for token in ('<Esc+b>', '<Meta-b>', '<Alt-b>'):
        event = handler.parse_key(token)
        assert event.key_type == KeyType.ALT
        assert event.value == 'b'
        assert event.is_alt


def test_space_is_regular(handler):
    event = handler.parse_key('<SPACE>')
    assert event.key_type == KeyType.REGULAR
    assert event.value == ' '


def test_printable_characters(handler):
    for ch in ('a', 'Q', '/', 'é', 'G'):
        event = handler.parse_key(ch)
        assert event.key_type == KeyType.REGULAR
        assert event.value == ch


def test_unknown_token_is_special(handler):
    event = handler.parse_key('<F1>')
    assert event.key_type == KeyType.SPECIAL
    assert event.value == 'f1'
