# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""State store contracts used for the image freshness record."""

from __future__ import annotations

from abc import abstractmethod
from typing import Protocol, runtime_checkable


@runtime_checkable
class StateStore(Protocol):
    """Define the durable key-value store that survives between sessions.

    Values are integers because the only persisted record is a millisecond
    timestamp. Implementations decide whether writes are flushed eagerly.
    """

    @abstractmethod
    def get(self, key: str) -> int | None:
        """Return the value stored under ``key``.

        Args:
            key: Identifier of the stored value.

        Returns:
            int | None: Stored value, or ``None`` when absent.
        """
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: int) -> None:
        """Persist ``value`` under ``key``.

        Args:
            key: Identifier of the stored value.
            value: Value to persist.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove any value stored under ``key``.

        Args:
            key: Identifier of the value to remove.
        """
        raise NotImplementedError


__all__ = ["StateStore"]
