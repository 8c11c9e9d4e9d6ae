"""Tests for background requests and their completion messages."""

import os
from unittest.mock import Mock

import pytest

from wikiterm.constants import BrowserConstants
from wikiterm.errors import HttpStatusError, TransportError
from wikiterm.state import (Article, SearchResult, RunSearch, FetchArticle, Quit,
                            SearchCompleted, ArticleFetched)
from wikiterm.tasks import TaskRunner


def run(runner, effect):
    thread = runner.submit(effect)
    thread.join(timeout=5)
    assert not thread.is_alive()
    return runner.drain()


def test_search_success():
    client = Mock()
    client.search.return_value = [SearchResult("Go"), SearchResult("Go (game)")]
    runner = TaskRunner(client=client)
    messages = run(runner, RunSearch(1, "Go", "wikipedia"))
    assert messages == [SearchCompleted(1, "Go",
                                        results=(SearchResult("Go"), SearchResult("Go (game)")))]
    client.search.assert_called_once_with("Go", "wikipedia")


def test_search_failure_becomes_error_message():
    client = Mock()
    client.search.side_effect = TransportError("timed out")
    runner = TaskRunner(client=client)
    assert run(runner, RunSearch(3, "Go", "arch")) == [
        SearchCompleted(3, "Go", error="timed out")]


def test_unexpected_exception_still_completes():
    client = Mock()
    client.search.side_effect = RuntimeError("boom")
    runner = TaskRunner(client=client)
    assert run(runner, RunSearch(1, "Go", "wikipedia")) == [
        SearchCompleted(1, "Go", error="boom")]


def test_fetch_success():
    client = Mock()
    client.fetch_article.return_value = Article("Go", "Go is a language.")
    runner = TaskRunner(client=client)
    assert run(runner, FetchArticle(2, "Go", "wikipedia")) == [
        ArticleFetched(2, "Go", content="Go is a language.")]


def test_fetch_failure():
    client = Mock()
    client.fetch_article.side_effect = HttpStatusError(503, "Service Unavailable")
    runner = TaskRunner(client=client)
    [message] = run(runner, FetchArticle(2, "Go", "wikipedia"))
    assert message.request_id == 2
    assert message.error == "API request failed with status code: 503 Service Unavailable"


def test_completion_wakes_loop():
    r, w = os.pipe()
    try:
        client = Mock()
        client.search.return_value = []
        runner = TaskRunner(wake_fd=w, client=client)
        run(runner, RunSearch(1, "Go", "wikipedia"))
        assert os.read(r, 16) == BrowserConstants.MESSAGE_PIPE_MARKER
    finally:
        os.close(r)
        os.close(w)


def test_detached_runner_only_queues():
    r, w = os.pipe()
    try:
        os.set_blocking(r, False)
        client = Mock()
        client.search.return_value = []
        runner = TaskRunner(wake_fd=w, client=client)
        runner.detach()
        assert len(run(runner, RunSearch(1, "Go", "wikipedia"))) == 1
        with pytest.raises(BlockingIOError):
            os.read(r, 16)
    finally:
        os.close(r)
        os.close(w)


def test_drain_empty():
    assert TaskRunner(client=Mock()).drain() == []


def test_submit_rejects_other_effects():
    with pytest.raises(TypeError):
        TaskRunner(client=Mock()).submit(Quit())
