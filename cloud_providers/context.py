"""Cancellation and deadline carrier for remote calls.

A ``Context`` is handed to every provider call. Providers check it before
starting remote work and between pages of work; callers cancel it (or let
its deadline pass) to make in-flight fetches return promptly.

Example::

    ctx = Context(timeout=30)
    subnets = registry.fetch_subnets_from_provider(ctx, "aws", creds)

    # elsewhere, e.g. on shutdown
    ctx.cancel()
"""
from __future__ import annotations

import threading
import time

from .errors import OperationCancelled


class Context:
    """Thread-safe cancel flag with an optional monotonic deadline."""

    def __init__(self, timeout: float | None = None, parent: Context | None = None):
        self._event = threading.Event()
        self._reason = ""
        self._parent = parent
        deadline = None if timeout is None else time.monotonic() + timeout
        if parent is not None and parent.deadline is not None:
            deadline = parent.deadline if deadline is None else min(deadline, parent.deadline)
        self.deadline = deadline

    @classmethod
    def background(cls) -> Context:
        """A context that is never cancelled and has no deadline."""
        return cls()

    def with_timeout(self, timeout: float) -> Context:
        """Derive a child that expires after ``timeout`` seconds or when this one is done."""
        return Context(timeout=timeout, parent=self)

    def cancel(self, reason: str = "context cancelled") -> None:
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def remaining(self) -> float | None:
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._parent is not None and self._parent.cancelled

    @property
    def expired(self) -> bool:
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def done(self) -> bool:
        return self.cancelled or self.expired

    def reason(self) -> str:
        if self._event.is_set():
            return self._reason
        if self._parent is not None and self._parent.cancelled:
            return self._parent.reason()
        if self.expired:
            return "deadline exceeded"
        return ""

    def raise_if_done(self) -> None:
        """Raise ``OperationCancelled`` when the context is cancelled or expired."""
        if self.done:
            raise OperationCancelled(self.reason())

    def wait(self, seconds: float) -> bool:
        """
        Block up to ``seconds`` (bounded by the deadline).

        Returns True if the context became done while waiting. Used in
        place of ``time.sleep`` between retries so cancellation is prompt.
        """
        end = time.monotonic() + seconds
        while True:
            if self.done:
                return True
            left = end - time.monotonic()
            remaining = self.remaining()
            if remaining is not None:
                left = min(left, remaining)
            if left <= 0:
                return self.done
            # Poll in small slices so a parent's cancellation is noticed.
            self._event.wait(min(left, 0.05))
