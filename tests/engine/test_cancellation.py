# tests/engine/test_cancellation.py
"""Tests for CancellationToken."""

from __future__ import annotations

from valuecheck.engine.cancellation import CancellationToken, cancel_after


class TestCancellationToken:
    def test_starts_uncancelled(self) -> None:
        token = CancellationToken()

        assert not token.cancelled
        assert token.reason is None
        assert token.wait(0) is False

    def test_first_reason_wins(self) -> None:
        token = CancellationToken()

        token.cancel("user pressed stop")
        token.cancel("run exceeded 1s")

        assert token.cancelled
        assert token.reason == "user pressed stop"

    def test_cancel_after(self) -> None:
        token = CancellationToken()

        timer = cancel_after(token, 0.01)

        assert token.wait(5)
        assert token.reason == "run exceeded 0.01s"
        assert timer.daemon

    def test_cancelled_timer_never_fires(self) -> None:
        token = CancellationToken()

        timer = cancel_after(token, 0.05)
        timer.cancel()

        assert token.wait(0.2) is False
