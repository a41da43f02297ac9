"""Tests for the host-driven trailing debouncer."""

from __future__ import annotations

import pytest

from nbody_review.domain.debounce import TrailingDebouncer


def _recorder() -> tuple[list[tuple[str, object]], TrailingDebouncer[str, object]]:
    settled: list[tuple[str, object]] = []
    debouncer: TrailingDebouncer[str, object] = TrailingDebouncer(
        0.3, lambda key, value: settled.append((key, value)), clock=lambda: 0.0
    )
    return settled, debouncer


def test_rapid_writes_collapse_to_last_value() -> None:
    settled, debouncer = _recorder()
    debouncer.submit("Planet.x", "1", now=0.0)
    debouncer.submit("Planet.x", "1.", now=0.1)
    debouncer.submit("Planet.x", "1.5", now=0.2)
    assert debouncer.poll(now=0.4) == []
    assert debouncer.poll(now=0.5) == ["Planet.x"]
    assert settled == [("Planet.x", "1.5")]


def test_nothing_settles_inside_window() -> None:
    settled, debouncer = _recorder()
    debouncer.submit("a", 1, now=1.0)
    assert debouncer.poll(now=1.29) == []
    assert settled == []
    assert debouncer.pending_keys() == ("a",)


def test_keys_settle_independently_in_write_order() -> None:
    settled, debouncer = _recorder()
    debouncer.submit("b", 1, now=0.0)
    debouncer.submit("a", 2, now=0.05)
    debouncer.submit("c", 3, now=0.5)
    assert debouncer.poll(now=0.4) == ["b", "a"]
    assert settled == [("b", 1), ("a", 2)]
    assert debouncer.pending_keys() == ("c",)


def test_rewrite_moves_key_behind_later_writes() -> None:
    settled, debouncer = _recorder()
    debouncer.submit("a", 1, now=0.0)
    debouncer.submit("b", 2, now=0.0)
    debouncer.submit("a", 3, now=0.0)
    debouncer.flush()
    assert settled == [("b", 2), ("a", 3)]


def test_flush_ignores_deadlines() -> None:
    settled, debouncer = _recorder()
    debouncer.submit("a", 1, now=0.0)
    assert debouncer.flush() == ["a"]
    assert settled == [("a", 1)]
    assert debouncer.flush() == []


def test_cancel_drops_pending() -> None:
    settled, debouncer = _recorder()
    debouncer.submit("a", 1, now=0.0)
    debouncer.cancel()
    assert debouncer.poll(now=10.0) == []
    assert settled == []


def test_uses_injected_clock() -> None:
    now = [0.0]
    settled: list[tuple[str, int]] = []
    debouncer: TrailingDebouncer[str, int] = TrailingDebouncer(
        0.3, lambda k, v: settled.append((k, v)), clock=lambda: now[0]
    )
    debouncer.submit("a", 1)
    now[0] = 0.31
    debouncer.poll()
    assert settled == [("a", 1)]


def test_negative_window_rejected() -> None:
    with pytest.raises(ValueError):
        TrailingDebouncer(-1.0, lambda k, v: None)
