"""Keyed per-user state stores.

Navigation sessions, carts and checkout sessions are each owned by one store
keyed by the user's channel identifier. Call sites depend only on the
`KeyedStore` interface so a persistent backend can be swapped in later.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class KeyedStore(ABC, Generic[T]):
    """Async get/set/delete by key."""

    @abstractmethod
    async def get(self, key: str) -> T | None:
        raise NotImplementedError

    @abstractmethod
    async def set(self, key: str, value: T) -> None:
        raise NotImplementedError

    @abstractmethod
    async def delete(self, key: str) -> None:
        raise NotImplementedError

    async def contains(self, key: str) -> bool:
        return await self.get(key) is not None


class InMemoryStore(KeyedStore[T]):
    """Process-lifetime store backed by a dict. Nothing survives a restart."""

    def __init__(self, *, name: str = "store") -> None:
        self._name = name
        self._items: dict[str, T] = {}

    async def get(self, key: str) -> T | None:
        return self._items.get(key)

    async def set(self, key: str, value: T) -> None:
        self._items[key] = value

    async def delete(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            logger.debug("%s: dropped entry for %s", self._name, key)

    def clear(self) -> None:
        """Clear all entries."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)


__all__ = ["InMemoryStore", "KeyedStore"]
