"""
Data models for the domain analysis system.

This module defines the shared annotation container attached to every
Domain and the records produced by batch analysis.
"""

import threading
from dataclasses import dataclass, field
from typing import Optional


class AnalysisData:
    """
    Insertion-ordered mapping of analysis criterion name to integer score.

    The surrounding Domain is immutable; this container is its only mutable
    part. A single lock guards every read and write, so one instance may be
    shared freely between threads. There is no live iterator: use
    ``snapshot()`` for a consistent copy.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: dict[str, int] = {}

    def get(self, key: str) -> Optional[int]:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: int) -> None:
        with self._lock:
            self._data[key] = value

    def increment(self, key: str, amount: int = 1) -> int:
        """Add ``amount`` to ``key`` (missing keys start at 0) and return the new value."""
        with self._lock:
            value = self._data.get(key, 0) + amount
            self._data[key] = value
            return value

    def snapshot(self) -> dict[str, int]:
        """Return a copy of all entries in insertion order."""
        with self._lock:
            return dict(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __repr__(self) -> str:
        return f"AnalysisData({self.snapshot()!r})"


@dataclass
class AnalysisError:
    """An input that could not be turned into a Domain."""

    source: str
    raw_input: str
    code: str
    message: str


@dataclass
class AnalyzerResult:
    """Outcome of analysing a batch of inputs."""

    domains: list = field(default_factory=list)  # list[Domain], first occurrence wins
    errors: list[AnalysisError] = field(default_factory=list)
    duplicates: int = 0
