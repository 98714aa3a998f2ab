"""Builtin CLI commands."""

from __future__ import annotations

import asyncio
import logging

import click

from orderrouter.core.config import Config, get_core_config
from orderrouter.core.types import InboundMessage
from orderrouter.cortex.services.dispatcher import MessageDispatcher
from orderrouter.modules.catalog import JsonCatalogStore
from orderrouter.modules.responders import ChatModelResponder, Responder, StaticResponder
from orderrouter.modules.transports import ConsoleTransport

logger = logging.getLogger(__name__)

QUIT_WORDS = frozenset({"/quit", "/exit"})


def build_responder(config: Config, catalog: JsonCatalogStore, *, offline: bool) -> Responder:
    if offline or not config.google.api_key:
        if not offline:
            click.echo("No Google API key configured; free-text questions get the fallback reply.")
        return StaticResponder(None)
    return ChatModelResponder(config, catalog)


def to_message(line: str, user_id: str, counter: int) -> InboundMessage:
    """Lines starting with `@` are sent as list selections (`@cat:pies`)."""
    if line.startswith("@") and len(line) > 1:
        return InboundMessage(
            sender=user_id,
            type="list_response",
            selection_id=line[1:].strip(),
            message_id=f"console-{counter}",
        )
    return InboundMessage(sender=user_id, body=line, message_id=f"console-{counter}")


async def _chat_loop(dispatcher: MessageDispatcher, user_id: str) -> None:
    counter = 0
    while True:
        try:
            line = await asyncio.to_thread(click.prompt, "you", prompt_suffix="> ")
        except (EOFError, click.Abort):
            click.echo()
            return
        line = line.strip()
        if line in QUIT_WORDS:
            return
        counter += 1
        await dispatcher.handle(to_message(line, user_id, counter))


@click.command("chat")
@click.option("--user", "user_id", default="console", show_default=True, help="Sender id")
@click.option("--offline", is_flag=True, help="Never call the chat model")
def chat_cmd(user_id: str, offline: bool) -> None:
    """Talk to the assistant in the terminal (type /quit to leave)."""
    config = get_core_config()
    catalog = JsonCatalogStore(config.catalog, config.store)
    dispatcher = MessageDispatcher(
        transport=ConsoleTransport(user_id=user_id),
        catalog=catalog,
        responder=build_responder(config, catalog, offline=offline),
        config=config,
    )
    click.echo(f"{config.store.name} | type 'menu' to start, '@<id>' to tap a list row.\n")
    asyncio.run(_chat_loop(dispatcher, user_id))


@click.command("catalog")
def catalog_cmd() -> None:
    """Print the loaded categories and products."""
    config = get_core_config()
    store = JsonCatalogStore(config.catalog, config.store)

    async def _load():
        return await store.load()

    snapshot = asyncio.run(_load())
    click.echo(f"Source: {snapshot.source}")
    for category in snapshot.categories:
        click.echo(click.style(f"\n{category.emoji} {category.name} [{category.id}]", bold=True))
        products = [p for p in snapshot.products if p.category == category.id]
        if not products:
            click.echo("  (no products)")
        for product in products:
            stock = "" if product.in_stock else " (out of stock)"
            sizes = f" | {', '.join(product.sizes)}" if product.sizes else ""
            click.echo(f"  - {product.name} [{product.id}] ${product.price:.2f}{sizes}{stock}")


__all__ = ["build_responder", "catalog_cmd", "chat_cmd", "to_message"]
