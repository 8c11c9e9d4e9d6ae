"""Tests for opening URLs in the system browser."""

import logging
import subprocess
from unittest.mock import patch

import pytest

from wikiterm.errors import LaunchError
from wikiterm.launcher import BrowserLauncher, open_url

URL = "https://en.wikipedia.org/wiki/Go"


@pytest.mark.parametrize("platform,command", [
    ("linux", ["xdg-open", URL]),
    ("darwin", ["open", URL]),
    ("win32", ["cmd", "/c", "start", "", URL]),
])
def test_platform_opener(platform, command):
    with patch("wikiterm.launcher.sys.platform", platform):
        with patch("wikiterm.launcher.subprocess.Popen") as mock_popen:
            BrowserLauncher.launch(URL)
    mock_popen.assert_called_once_with(command, stdin=subprocess.DEVNULL,
                                       stdout=subprocess.DEVNULL,
                                       stderr=subprocess.DEVNULL)


def test_missing_opener_raises_launch_error():
    with patch("wikiterm.launcher.sys.platform", "linux"):
        with patch("wikiterm.launcher.subprocess.Popen",
                   side_effect=FileNotFoundError("xdg-open")):
            with pytest.raises(LaunchError):
                BrowserLauncher.launch(URL)


def test_other_platforms_use_webbrowser():
    with patch("wikiterm.launcher.sys.platform", "sunos5"):
        with patch("wikiterm.launcher.webbrowser.open", return_value=True) as mock_open:
            BrowserLauncher.launch(URL)
    mock_open.assert_called_once_with(URL)


def test_no_browser_available():
    with patch("wikiterm.launcher.sys.platform", "sunos5"):
        with patch("wikiterm.launcher.webbrowser.open", return_value=False):
            with pytest.raises(LaunchError):
                BrowserLauncher.launch(URL)


def test_open_url_logs_failures(caplog):
    with patch("wikiterm.launcher.BrowserLauncher.launch",
               side_effect=LaunchError("no opener")):
        with caplog.at_level(logging.WARNING, logger="wikiterm.launcher"):
            open_url(URL)
    assert "no opener" in caplog.text
