"""Checkout session state.

A session exists exactly while the user is in checkout. Sessions are
immutable values; every step transition stores a new one.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from orderrouter.core.session_store import InMemoryStore, KeyedStore


class CheckoutStep(str, Enum):
    NAME = "name"
    PHONE = "phone"
    ADDRESS = "address"
    PAYMENT = "payment"
    CONFIRM = "confirm"


@dataclass(frozen=True)
class CheckoutData:
    name: str | None = None
    phone: str | None = None
    address: str | None = None
    payment: str | None = None
    discount_eligible: bool = False


@dataclass(frozen=True)
class CheckoutSession:
    user_id: str
    step: CheckoutStep = CheckoutStep.NAME
    data: CheckoutData = field(default_factory=CheckoutData)

    def advance(self, step: CheckoutStep, **data: object) -> "CheckoutSession":
        return replace(self, step=step, data=replace(self.data, **data))


class CheckoutSessionStore:
    """Keyed checkout sessions."""

    def __init__(self, store: KeyedStore[CheckoutSession] | None = None) -> None:
        self._store: KeyedStore[CheckoutSession] = (
            store if store is not None else InMemoryStore(name="checkout_sessions")
        )

    async def get(self, user_id: str) -> CheckoutSession | None:
        return await self._store.get(user_id)

    async def create(self, user_id: str) -> CheckoutSession:
        session = CheckoutSession(user_id=user_id)
        await self._store.set(user_id, session)
        return session

    async def save(self, session: CheckoutSession) -> None:
        await self._store.set(session.user_id, session)

    async def delete(self, user_id: str) -> None:
        await self._store.delete(user_id)

    async def exists(self, user_id: str) -> bool:
        return await self._store.contains(user_id)


__all__ = ["CheckoutData", "CheckoutSession", "CheckoutSessionStore", "CheckoutStep"]
