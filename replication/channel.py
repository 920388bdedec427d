"""Shared-property channel contract and an in-process implementation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Optional

ChangeCallback = Callable[[str, str], None]


class SharedPropertyChannel(ABC):
    """Key/value store whose changes are broadcast to every subscriber."""

    @abstractmethod
    def publish(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` and notify subscribers."""
        raise NotImplementedError

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the current value stored under ``key``, if any."""
        raise NotImplementedError

    @abstractmethod
    def subscribe(self, callback: ChangeCallback) -> None:
        """Register ``callback(key, value)`` for every change."""
        raise NotImplementedError


class InMemoryChannel(SharedPropertyChannel):
    """Synchronous channel shared by several engines in one process.

    Like most shared-state transports it delivers a publish back to the
    publisher as well as to every other subscriber.
    """

    def __init__(self) -> None:
        self._values: Dict[str, str] = {}
        self._subscribers: List[ChangeCallback] = []

    def publish(self, key: str, value: str) -> None:
        self._values[key] = value
        for callback in list(self._subscribers):
            callback(key, value)

    def read(self, key: str) -> Optional[str]:
        return self._values.get(key)

    def subscribe(self, callback: ChangeCallback) -> None:
        self._subscribers.append(callback)
