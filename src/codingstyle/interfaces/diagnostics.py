# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Contracts for the collaborators that consume analysis results."""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from codingstyle.core.models import Finding


@runtime_checkable
class DiagnosticsSink(Protocol):
    """Receive findings per file and render them."""

    @abstractmethod
    def update(self, path: Path, findings: Sequence[Finding]) -> None:
        """Replace the diagnostics shown for ``path``.

        Args:
            path: Absolute path of the file the findings belong to.
            findings: Findings in report order; empty clears the file.
        """
        raise NotImplementedError

    @abstractmethod
    def clear(self) -> None:
        """Remove every diagnostic held by the sink."""
        raise NotImplementedError

    @abstractmethod
    def dispose(self) -> None:
        """Release resources held by the sink."""
        raise NotImplementedError


class Notifier(Protocol):
    """Surface user-visible messages for failed runs."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Show ``message`` as an error notification.

        Args:
            message: Text describing the failure.
        """
        raise NotImplementedError


class TargetValidator(Protocol):
    """Decide whether a trigger designates an analyzable workspace."""

    @abstractmethod
    def resolve_target(self, trigger: Path) -> Path:
        """Return the workspace root that ``trigger`` belongs to.

        Args:
            trigger: File or directory that caused the analysis request.

        Returns:
            Path: Absolute workspace root to analyze.

        Raises:
            InvalidTargetError: When the trigger is not eligible.
        """
        raise NotImplementedError


__all__ = ["DiagnosticsSink", "Notifier", "TargetValidator"]
