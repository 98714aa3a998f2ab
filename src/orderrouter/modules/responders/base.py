"""Natural-language responder interface.

The conversation engine only decides *when* to delegate; what to answer is
entirely up to the responder.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class Responder(ABC):
    @abstractmethod
    async def generate(
        self,
        text: str,
        user_id: str,
        cart_context: Mapping[str, Any] | None = None,
    ) -> str | None:
        """Answer free-form text, or return None when no answer is available.

        `cart_context` carries `item_count` and `subtotal` when the user has a
        non-empty cart. Implementations must not raise for provider failures.
        """
        raise NotImplementedError


class StaticResponder(Responder):
    """Always returns the same answer (or None). Useful offline and in tests."""

    def __init__(self, answer: str | None = None) -> None:
        self._answer = answer

    async def generate(
        self,
        text: str,
        user_id: str,
        cart_context: Mapping[str, Any] | None = None,
    ) -> str | None:
        return self._answer


__all__ = ["Responder", "StaticResponder"]
