# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Process execution and delayed-call contracts."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Callable, Sequence
from subprocess import CompletedProcess
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from codingstyle.core.process import CommandOptions


class CommandRunner(Protocol):
    """Execute an external command and return its captured output."""

    def __call__(self, args: Sequence[str], options: CommandOptions | None = None) -> CompletedProcess[str]:
        """Run ``args`` to completion.

        Args:
            args: Command and arguments, executable first.
            options: Optional execution options.

        Returns:
            CompletedProcess: Exit status and captured text streams.
        """
        ...


class ScheduledCall(Protocol):
    """Handle returned by :meth:`Scheduler.call_later`."""

    @abstractmethod
    def cancel(self) -> None:
        """Prevent the call from running if it has not started yet."""
        raise NotImplementedError


class Scheduler(Protocol):
    """Run callbacks after a delay."""

    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Schedule ``callback`` to run once after ``delay`` seconds.

        Args:
            delay: Delay in seconds before the callback runs.
            callback: Zero-argument callable to invoke.

        Returns:
            ScheduledCall: Handle that can cancel the pending call.
        """
        raise NotImplementedError


__all__ = ["CommandRunner", "ScheduledCall", "Scheduler"]
