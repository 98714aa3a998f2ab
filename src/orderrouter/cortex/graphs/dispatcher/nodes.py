"""Dispatcher graph nodes.

Nodes only decide. Each returns a partial state update whose `actions` are
appended to the run's outbound list; nothing is sent here.
"""

from __future__ import annotations

import logging
from typing import Any

from orderrouter.core.config import StoreConfig
from orderrouter.cortex.flows.checkout import CheckoutFlow
from orderrouter.cortex.flows.navigation import NavigationMachine
from orderrouter.cortex.flows.navigation.keywords import is_checkout_trigger
from orderrouter.cortex.presentation.actions import OutboundText, Reply
from orderrouter.cortex.services.cart import CartService
from orderrouter.modules.responders.base import Responder

from .state import DispatchState

logger = logging.getLogger(__name__)


def fallback_text(store: StoreConfig) -> str:
    return (
        "Sorry, I'm having technical difficulties right now. 😔\n\n"
        f"Please contact us directly at {store.contact_phone}.\n"
        "Or type *menu* to see the options."
    )


def _update(reply: Reply, node: str) -> dict[str, Any]:
    update: dict[str, Any] = {
        "actions": list(reply.actions),
        "handled": reply.handled,
        "checkout_requested": reply.checkout_requested,
    }
    if reply.handled:
        update["handled_by"] = node
    return update


class DispatcherNodes:
    """Graph nodes bound to the conversation components they route between."""

    def __init__(
        self,
        *,
        checkout: CheckoutFlow,
        navigation: NavigationMachine,
        cart: CartService,
        responder: Responder,
        store: StoreConfig,
    ) -> None:
        self.checkout_flow = checkout
        self.navigation_machine = navigation
        self.cart = cart
        self.responder_impl = responder
        self.store = store

    async def checkout(self, state: DispatchState) -> dict[str, Any]:
        if not await self.checkout_flow.in_checkout(state["user_id"]):
            return {"handled": False}
        return _update(await self.checkout_flow.handle(state["message"]), "checkout")

    async def navigation(self, state: DispatchState) -> dict[str, Any]:
        return _update(await self.navigation_machine.handle(state["message"]), "navigation")

    async def checkout_trigger(self, state: DispatchState) -> dict[str, Any]:
        message = state["message"]
        requested = state.get("checkout_requested", False)
        if not requested and (message.is_selection or not is_checkout_trigger(message.text)):
            return {"handled": False}
        update = _update(await self.checkout_flow.start(state["user_id"]), "checkout_trigger")
        update["checkout_requested"] = False
        return update

    async def responder(self, state: DispatchState) -> dict[str, Any]:
        user_id = state["user_id"]
        message = state["message"]
        context = await self.cart.cart_context(user_id)
        answer = await self.responder_impl.generate(message.text, user_id, context)
        if not answer:
            logger.warning("Responder gave no answer for %s; sending fallback", user_id)
            answer = fallback_text(self.store)
        return {
            "actions": [OutboundText(answer)],
            "handled": True,
            "handled_by": "responder",
        }


__all__ = ["DispatcherNodes", "fallback_text"]
