"""Terminal transport used by the `orderrouter chat` command."""

from __future__ import annotations

import logging

import click

from orderrouter.core.exceptions import DeliveryError

from .base import Transport

logger = logging.getLogger(__name__)


class ConsoleTransport(Transport):
    """Echoes outbound messages to the terminal.

    Native list messages are not supported, so every choice list goes through
    the numbered-text fallback.
    """

    def __init__(self, *, user_id: str = "console", color: bool = True) -> None:
        self.user_id = user_id
        self._color = color

    def _echo(self, recipient: str, text: str) -> None:
        prefix = "bot" if recipient == self.user_id else f"bot → {recipient}"
        header = click.style(f"[{prefix}]", fg="green", bold=True) if self._color else f"[{prefix}]"
        click.echo(f"{header} {text}\n")

    async def send_text(self, user_id: str, text: str) -> None:
        self._echo(user_id, text)

    async def send_image(self, user_id: str, url: str, caption: str = "") -> None:
        self._echo(user_id, f"🖼  {url}" + (f"\n{caption}" if caption else ""))

    async def send_list(self, user_id: str, choices) -> None:
        raise DeliveryError("console transport cannot render list messages")


__all__ = ["ConsoleTransport"]
