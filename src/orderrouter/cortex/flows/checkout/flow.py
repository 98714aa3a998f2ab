"""Guided checkout: name, phone, address, payment, confirmation."""

from __future__ import annotations

import logging
from typing import Sequence

from orderrouter.core.config import StoreConfig
from orderrouter.core.exceptions import InputError
from orderrouter.core.types import InboundMessage
from orderrouter.cortex.presentation.actions import OutboundText, Reply
from orderrouter.cortex.presentation.choices import KEYCAP
from orderrouter.cortex.services.cart import (
    DISCOUNT_RATE,
    CartService,
    CartTotals,
    LineItem,
    format_line_items,
    format_money,
)
from orderrouter.cortex.services.checkout_sessions import (
    CheckoutData,
    CheckoutSession,
    CheckoutSessionStore,
    CheckoutStep,
)

from ..navigation.keywords import is_cancel
from .parsers import parse_address, parse_confirmation, parse_payment, parse_required

logger = logging.getLogger(__name__)

RULE = "────────────────────"


def _discount_label() -> str:
    return f"{DISCOUNT_RATE * 100:.0f}% off"


class CheckoutFlow:
    """Checkout state machine. Owns checkout sessions; reads the cart."""

    def __init__(
        self,
        cart: CartService,
        store: StoreConfig,
        sessions: CheckoutSessionStore | None = None,
    ) -> None:
        self._cart = cart
        self._store = store
        self._sessions = sessions if sessions is not None else CheckoutSessionStore()

    async def in_checkout(self, user_id: str) -> bool:
        return await self._sessions.exists(user_id)

    async def get_session(self, user_id: str) -> CheckoutSession | None:
        return await self._sessions.get(user_id)

    async def start(self, user_id: str) -> Reply:
        if await self._cart.is_empty(user_id):
            return Reply.text(
                "🛒 Your cart is empty!\n\n"
                "Type *catalog* to see our products.\n"
                "Or type *menu* for all options."
            )

        await self._sessions.create(user_id)
        logger.info("Checkout started for %s", user_id)

        lines = await self._cart.list_items(user_id)
        standard = await self._cart.compute_totals(user_id, False)
        discounted = await self._cart.compute_totals(user_id, True)
        summary = [
            "🛒 *YOUR ORDER:*",
            "",
            *format_line_items(lines),
            "",
            f"💰 Subtotal: {format_money(standard.subtotal)}",
            f"💳 Total: {format_money(standard.total)}",
            f"💚 {self._store.payment_methods[0]} ({_discount_label()}): "
            f"{format_money(discounted.total)}",
        ]
        return Reply.of(
            OutboundText("\n".join(summary)),
            OutboundText(f"{RULE}\n\n📝 *DELIVERY DETAILS*\n\nPlease tell me your *full name*:"),
        )

    async def cancel(self, user_id: str) -> Reply:
        await self._sessions.delete(user_id)
        logger.info("Checkout cancelled for %s", user_id)
        return Reply.text("❌ Order cancelled. Your cart was kept.\n\nType *menu* to start over.")

    async def handle(self, message: InboundMessage) -> Reply:
        user_id = message.sender
        session = await self._sessions.get(user_id)
        if session is None:
            return Reply.not_handled()

        text = message.text
        if is_cancel(text):
            return await self.cancel(user_id)

        try:
            return await self._step(session, text)
        except InputError as e:
            logger.debug("Checkout input rejected for %s at %s: %s", user_id, session.step.value, e)
            return Reply.text(self._reprompt(session.step))

    async def _step(self, session: CheckoutSession, text: str) -> Reply:
        if session.step is CheckoutStep.NAME:
            name = parse_required(text, "name")
            await self._sessions.save(session.advance(CheckoutStep.PHONE, name=name))
            return Reply.text(f"✅ Thank you, *{name}*!\n\nNow tell me your *phone number*:")

        if session.step is CheckoutStep.PHONE:
            phone = parse_required(text, "phone")
            await self._sessions.save(session.advance(CheckoutStep.ADDRESS, phone=phone))
            return Reply.text(
                "✅ Got it!\n\nPlease send the *full delivery address*:\n"
                "_(street, number, neighbourhood)_\n\n"
                "Or type *pickup* to collect in store."
            )

        if session.step is CheckoutStep.ADDRESS:
            address, pickup = parse_address(text, self._store.pickup_label)
            await self._sessions.save(session.advance(CheckoutStep.PAYMENT, address=address))
            noted = "Pickup noted!" if pickup else "Address noted!"
            return Reply.text(f"✅ {noted}\n\n{self._payment_prompt()}")

        if session.step is CheckoutStep.PAYMENT:
            payment, eligible = parse_payment(text, self._store.payment_methods)
            updated = session.advance(
                CheckoutStep.CONFIRM, payment=payment, discount_eligible=eligible
            )
            await self._sessions.save(updated)
            return Reply.text(await self._order_summary(updated))

        if parse_confirmation(text):
            return await self.finalize(session)
        return await self.cancel(session.user_id)

    async def finalize(self, session: CheckoutSession) -> Reply:
        user_id = session.user_id
        data = session.data
        lines = await self._cart.list_items(user_id)
        totals = await self._cart.compute_totals(user_id, data.discount_eligible)

        # attendant notice is always delivered before the customer confirmation
        actions: list[OutboundText] = []
        attendant = self._store.attendant_id
        if attendant:
            actions.append(
                OutboundText(
                    self._attendant_notice(data, lines, totals), to=attendant, best_effort=True
                )
            )
        else:
            logger.warning("No attendant configured; order from %s not forwarded", user_id)
        actions.append(
            OutboundText(
                f"✅ *ORDER CONFIRMED!*\n\n"
                f"Thank you, *{data.name}*!\n\n"
                "We received your order and will be in touch shortly.\n\n"
                f"📱 Questions? Reach us at {self._store.contact_phone}\n\n"
                f"{self._store.name} | {self._store.city}"
            )
        )

        await self._cart.clear(user_id)
        await self._sessions.delete(user_id)
        logger.info("Order finalized for %s: total %s", user_id, totals.total)
        return Reply.of(*actions)

    # ---- text ------------------------------------------------------------

    def _payment_prompt(self) -> str:
        options = []
        for i, method in enumerate(self._store.payment_methods, 1):
            suffix = f" ({_discount_label()}) 💚" if i == 1 else ""
            options.append(f"{i}{KEYCAP} {method}{suffix}")
        return "💳 *PAYMENT METHOD:*\n\n" + "\n".join(options) + "\n\nType the option number:"

    def _reprompt(self, step: CheckoutStep) -> str:
        if step is CheckoutStep.PAYMENT:
            return "❌ Invalid option. Type 1, 2, 3 or 4."
        if step is CheckoutStep.CONFIRM:
            return "Type *yes* to confirm or *no* to cancel."
        return f"Please send your {step.value}."

    async def _order_summary(self, session: CheckoutSession) -> str:
        data = session.data
        lines = await self._cart.list_items(session.user_id)
        totals = await self._cart.compute_totals(session.user_id, data.discount_eligible)
        discount_note = f" ({_discount_label()})" if data.discount_eligible else ""
        parts = [
            "📋 *ORDER SUMMARY*",
            "",
            f"👤 *Name:* {data.name}",
            f"📱 *Phone:* {data.phone}",
            f"📍 *Address:* {data.address}",
            f"💳 *Payment:* {data.payment}{discount_note}",
            "",
            "🛒 *ITEMS:*",
            *format_line_items(lines),
            "",
            f"💰 *TOTAL: {format_money(totals.total)}*",
            "",
            "✅ Confirm order?",
            "",
            f"1{KEYCAP} *Yes*, confirm",
            f"2{KEYCAP} *No*, cancel",
        ]
        return "\n".join(parts)

    def _attendant_notice(
        self, data: CheckoutData, lines: Sequence[LineItem], totals: CartTotals
    ) -> str:
        parts = [
            "🔔 *NEW ORDER!*",
            "",
            f"👤 Customer: {data.name}",
            f"📱 Phone: {data.phone}",
            f"📍 Address: {data.address}",
            f"💳 Payment: {data.payment}",
            "",
            "🛒 *ITEMS:*",
            *format_line_items(lines),
            "",
            f"💰 *TOTAL: {format_money(totals.total)}*",
        ]
        return "\n".join(parts)


__all__ = ["CheckoutFlow"]
