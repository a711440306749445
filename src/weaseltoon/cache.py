from __future__ import annotations

from collections import OrderedDict
from typing import Generic, Hashable, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """Least-recently-used map with a size limit; ``None`` is never stored."""

    def __init__(self, max_size: int = 128) -> None:
        if max_size <= 0:
            raise ValueError("max_size must be positive.")
        self._max_size = max_size
        self._store: OrderedDict[K, V] = OrderedDict()

    def __len__(self) -> int:
        return len(self._store)

    def get(self, key: K) -> V | None:
        value = self._store.get(key)
        if value is None:
            return None
        self._store.move_to_end(key)
        return value

    def set(self, key: K, value: V) -> None:
        if value is None:
            raise ValueError("LRUCache cannot store None.")
        self._store[key] = value
        self._store.move_to_end(key)
        while len(self._store) > self._max_size:
            self._store.popitem(last=False)

    def clear(self) -> None:
        self._store.clear()
