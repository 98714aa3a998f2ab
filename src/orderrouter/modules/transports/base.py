"""Outbound messaging transport interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orderrouter.cortex.presentation.choices import ChoiceList


class Transport(ABC):
    """Channel the assistant talks through.

    Implementations raise `DeliveryError` (or any exception) on failure; the
    presentation layer decides how to degrade.
    """

    @abstractmethod
    async def send_text(self, user_id: str, text: str) -> None:
        raise NotImplementedError

    @abstractmethod
    async def send_image(self, user_id: str, url: str, caption: str = "") -> None:
        raise NotImplementedError

    @abstractmethod
    async def send_list(self, user_id: str, choices: "ChoiceList") -> None:
        raise NotImplementedError


__all__ = ["Transport"]
