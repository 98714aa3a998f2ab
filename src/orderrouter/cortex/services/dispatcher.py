"""Top-level inbound message dispatcher.

Runs the dispatcher graph for each message and delivers the resulting
actions. Turns of one user are serialized; different users never wait on
each other. Nothing raised while handling a message escapes `handle()`.
"""

from __future__ import annotations

import asyncio
import logging
import weakref
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Literal

from orderrouter.core.config import Config, get_core_config
from orderrouter.core.exceptions import IntegrityError
from orderrouter.core.types import InboundMessage
from orderrouter.cortex.flows.checkout import CheckoutFlow
from orderrouter.cortex.flows.navigation import NavigationMachine
from orderrouter.cortex.graphs.dispatcher import (
    DispatcherNodes,
    compile_dispatcher_graph,
    initial_state,
)
from orderrouter.cortex.presentation.actions import DeliveryReport, deliver
from orderrouter.modules.catalog.base import CatalogStore
from orderrouter.modules.responders.base import Responder
from orderrouter.modules.transports.base import Transport

from .cart import CartService

logger = logging.getLogger(__name__)

RECOVERY_TEXT = "Sorry, something went wrong on our side. 😔\n\nType *menu* to start over."

Status = Literal["handled", "ignored", "duplicate", "failed"]


@dataclass(frozen=True)
class DispatchOutcome:
    status: Status
    handled_by: str | None = None
    report: DeliveryReport | None = None


class SeenMessages:
    """Bounded record of recently seen message ids (oldest evicted first)."""

    def __init__(self, capacity: int) -> None:
        self._capacity = max(1, capacity)
        self._ids: OrderedDict[str, None] = OrderedDict()

    def check_and_add(self, message_id: str) -> bool:
        """Record `message_id`; return True if it had been seen already."""
        if message_id in self._ids:
            self._ids.move_to_end(message_id)
            return True
        self._ids[message_id] = None
        if len(self._ids) > self._capacity:
            self._ids.popitem(last=False)
        return False

    def __len__(self) -> int:
        return len(self._ids)


class MessageDispatcher:
    """Routes every inbound message: checkout, navigation, checkout trigger, responder."""

    def __init__(
        self,
        *,
        transport: Transport,
        catalog: CatalogStore,
        responder: Responder,
        config: Config | None = None,
    ) -> None:
        self._config = config or get_core_config()
        self._transport = transport

        self.cart = CartService(catalog)
        self.navigation = NavigationMachine(
            catalog,
            self.cart,
            self._config.store,
            image_base_url=self._config.transport.image_base_url,
        )
        self.checkout = CheckoutFlow(self.cart, self._config.store)
        self._graph = compile_dispatcher_graph(
            DispatcherNodes(
                checkout=self.checkout,
                navigation=self.navigation,
                cart=self.cart,
                responder=responder,
                store=self._config.store,
            )
        )

        # a lock lives only while some turn of that user holds or awaits it
        self._locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )
        self._seen = SeenMessages(self._config.dispatcher.seen_message_window)

    @property
    def graph(self) -> Any:
        return self._graph

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        return lock

    async def handle(self, message: InboundMessage) -> DispatchOutcome:
        if not message.text and not message.is_selection:
            logger.debug("Ignoring empty message from %s", message.sender)
            return DispatchOutcome("ignored")

        if message.message_id and self._seen.check_and_add(message.message_id):
            logger.info("Dropping duplicate message %s from %s", message.message_id, message.sender)
            return DispatchOutcome("duplicate")

        async with self._lock_for(message.sender):
            return await self._run(message)

    async def _run(self, message: InboundMessage) -> DispatchOutcome:
        user_id = message.sender
        try:
            result = await self._graph.ainvoke(initial_state(message))
            report = await deliver(
                self._transport,
                user_id,
                result["actions"],
                image_timeout=self._config.transport.image_timeout_sec,
            )
        except Exception as e:
            error = IntegrityError(f"{type(e).__name__}: {e}")
            logger.exception("[%s] Failed to handle message from %s", error.code, user_id)
            await self._recover(user_id)
            return DispatchOutcome("failed")

        handled_by = result.get("handled_by")
        logger.debug("Message from %s handled by %s", user_id, handled_by)
        return DispatchOutcome("handled", handled_by=handled_by, report=report)

    async def _recover(self, user_id: str) -> None:
        try:
            await self.navigation.reset(user_id)
            await self._transport.send_text(user_id, RECOVERY_TEXT)
        except Exception as e:
            logger.error("Recovery message to %s failed: %s", user_id, e)


__all__ = ["DispatchOutcome", "MessageDispatcher", "RECOVERY_TEXT", "SeenMessages"]
