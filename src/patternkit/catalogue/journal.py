"""Ordered record of observable effects."""

from __future__ import annotations

import threading


class EffectJournal:
    """Append-only list of effect markers, safe to share between layers."""

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._lock = threading.Lock()

    def record(self, entry: str) -> None:
        with self._lock:
            self._entries.append(entry)

    @property
    def entries(self) -> list[str]:
        with self._lock:
            return list(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
