from __future__ import annotations

import pytest

from newsfeed_tui.query import DebouncedQuery, normalize_query


@pytest.fixture
def commits():
    return []


@pytest.fixture
def query(clock, commits):
    return DebouncedQuery(clock, on_commit=commits.append, delay=0.25)


@pytest.mark.parametrize(
    "raw, expected",
    [("", ""), ("  Rome ", "rome"), ("FOO bar", "foo bar"), ("\tx\n", "x")],
)
def test_normalize_query(raw, expected):
    assert normalize_query(raw) == expected


def test_raw_value_updates_immediately(query, commits):
    query.on_input("Ro")
    assert query.raw == "Ro"
    assert query.normalized == ""
    assert commits == []
    assert query.pending


def test_commit_after_idle_delay(query, clock, commits):
    query.on_input("  Rome ")
    clock.advance(0.24)
    assert commits == []
    clock.advance(0.02)
    assert commits == ["rome"]
    assert query.normalized == "rome"
    assert not query.pending


def test_burst_commits_once_with_last_value(query, clock, commits):
    for raw in ["R", "Ro", "Rom", "Rome"]:
        query.on_input(raw)
        clock.advance(0.1)
    assert commits == []
    clock.advance(0.25)
    assert commits == ["rome"]
    assert len(clock.pending) == 0


def test_each_input_restarts_the_timer(query, clock, commits):
    query.on_input("a")
    clock.advance(0.2)
    query.on_input("ab")
    clock.advance(0.2)
    assert commits == []
    clock.advance(0.1)
    assert commits == ["ab"]


def test_separate_idle_periods_commit_separately(query, clock, commits):
    query.on_input("a")
    clock.advance(0.3)
    query.on_input("b")
    clock.advance(0.3)
    assert commits == ["a", "b"]


def test_teardown_cancels_pending_commit(query, clock, commits):
    query.on_input("rome")
    query.teardown()
    clock.advance(1)
    assert commits == []
    assert not query.pending


def test_clear_commits_immediately(query, clock, commits):
    query.on_input("rome")
    clock.advance(0.3)
    query.on_input("romeo")
    query.clear()
    assert query.raw == ""
    assert query.normalized == ""
    assert commits == ["rome", ""]
    clock.advance(1)
    assert commits == ["rome", ""]


def test_works_without_callback(clock):
    query = DebouncedQuery(clock)
    query.on_input("X")
    clock.advance(0.25)
    assert query.normalized == "x"


def test_echo_of_cleared_value_is_ignored(query, clock, commits):
    query.on_input("rome")
    query.clear()
    # The search box reports the emptied value back after a clear.
    query.on_input("")
    assert not query.pending
    clock.advance(1)
    assert commits == [""]


def test_unchanged_input_after_commit_is_ignored(query, clock, commits):
    query.on_input("rome")
    clock.advance(0.3)
    query.on_input("rome")
    assert not query.pending
    clock.advance(1)
    assert commits == ["rome"]
