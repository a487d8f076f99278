# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Delayed-call scheduling backed by :class:`threading.Timer`."""

from __future__ import annotations

import threading
from collections.abc import Callable

from ..interfaces.runtime import ScheduledCall, Scheduler


class TimerCall(ScheduledCall):
    """Cancellable handle wrapping a daemon :class:`threading.Timer`."""

    def __init__(self, timer: threading.Timer) -> None:
        self._timer = timer

    def cancel(self) -> None:
        """Cancel the timer if it has not fired yet."""

        self._timer.cancel()


class ThreadingScheduler(Scheduler):
    """Run callbacks on short-lived daemon timer threads."""

    def __init__(self, *, name: str = "codingstyle-debounce") -> None:
        self._name = name

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Schedule ``callback`` on a timer thread after ``delay`` seconds.

        Args:
            delay: Delay in seconds; negative values run immediately.
            callback: Zero-argument callable to invoke.

        Returns:
            ScheduledCall: Handle cancelling the timer.
        """

        timer = threading.Timer(max(delay, 0.0), callback)
        timer.name = self._name
        timer.daemon = True
        timer.start()
        return TimerCall(timer)


__all__ = ["ThreadingScheduler", "TimerCall"]
