"""
Key-value storage interface and its in-memory implementation.

Helpers in ``database.helpers`` only talk to ``KeyValueStore`` so a
persistent backend can replace ``InMemoryStore`` without touching the
auth layer or the route handlers.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Generic, List, Optional, TypeVar

V = TypeVar("V")


class KeyValueStore(ABC, Generic[V]):
    """get / put / find / delete by key."""

    @abstractmethod
    def get(self, key: str) -> Optional[V]: ...

    @abstractmethod
    def put(self, key: str, value: V) -> None: ...

    @abstractmethod
    def find(self, predicate: Callable[[V], bool]) -> List[V]:
        """Return every value matching ``predicate`` in insertion order."""

    @abstractmethod
    def delete(self, key: str) -> Optional[V]:
        """Remove ``key`` and return the removed value (``None`` if absent)."""

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def __len__(self) -> int: ...

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None


class InMemoryStore(KeyValueStore[V]):
    """
    Insertion-ordered dict behind a lock.

    The lock makes each call atomic if handlers ever run on worker threads;
    it does not make read-modify-write sequences across calls atomic.
    """

    def __init__(self) -> None:
        self._items: Dict[str, V] = {}
        self._lock = threading.RLock()

    def get(self, key: str) -> Optional[V]:
        with self._lock:
            return self._items.get(key)

    def put(self, key: str, value: V) -> None:
        with self._lock:
            self._items[key] = value

    def find(self, predicate: Callable[[V], bool]) -> List[V]:
        with self._lock:
            return [v for v in self._items.values() if predicate(v)]

    def delete(self, key: str) -> Optional[V]:
        with self._lock:
            return self._items.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
