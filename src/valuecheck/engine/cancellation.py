# src/valuecheck/engine/cancellation.py
"""Run-scope cancellation signal.

Cancelling stops new units from starting. Units already running finish
(or hit their own timeout); the run then reports what it has, marked
incomplete.
"""

from __future__ import annotations

import threading


class CancellationToken:
    """Thread-safe, one-way cancellation flag.

    The first reason given wins; later cancel() calls are no-ops.
    """

    __slots__ = ("_event", "_lock", "_reason")

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._reason: str | None = None

    def cancel(self, reason: str = "cancelled") -> None:
        with self._lock:
            if self._event.is_set():
                return
            self._reason = reason
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        with self._lock:
            return self._reason

    def wait(self, timeout: float | None = None) -> bool:
        """Block until cancelled or timeout elapses. Returns cancelled state."""
        return self._event.wait(timeout)


def cancel_after(token: CancellationToken, seconds: float) -> threading.Timer:
    """Arm a daemon timer that cancels ``token`` after ``seconds``.

    The caller owns the timer and should cancel() it once the run ends.
    """
    timer = threading.Timer(seconds, token.cancel, kwargs={"reason": f"run exceeded {seconds}s"})
    timer.daemon = True
    timer.start()
    return timer
