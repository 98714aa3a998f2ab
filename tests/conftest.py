"""Shared fixtures: a small catalog, store settings and a recording transport."""

from __future__ import annotations

from decimal import Decimal

import pytest

from orderrouter.core.config import Config, StoreConfig
from orderrouter.core.exceptions import DeliveryError
from orderrouter.core.types import Category, InboundMessage, Product
from orderrouter.modules.catalog import InMemoryCatalogStore
from orderrouter.modules.transports.base import Transport


class RecordingTransport(Transport):
    """Transport that records every send.

    `supports_lists=False` makes `send_list` raise like a channel without
    native list messages; `fail_images` / `fail_recipients` inject failures.
    """

    def __init__(
        self,
        *,
        supports_lists: bool = False,
        fail_images: bool = False,
        fail_recipients: set[str] | None = None,
    ) -> None:
        self.supports_lists = supports_lists
        self.fail_images = fail_images
        self.fail_recipients = fail_recipients or set()
        self.texts: list[tuple[str, str]] = []
        self.images: list[tuple[str, str, str]] = []
        self.lists: list[tuple[str, object]] = []

    async def send_text(self, user_id: str, text: str) -> None:
        if user_id in self.fail_recipients:
            raise DeliveryError(f"cannot reach {user_id}")
        self.texts.append((user_id, text))

    async def send_image(self, user_id: str, url: str, caption: str = "") -> None:
        if self.fail_images:
            raise DeliveryError("image upload failed")
        self.images.append((user_id, url, caption))

    async def send_list(self, user_id: str, choices) -> None:
        if not self.supports_lists:
            raise DeliveryError("lists not supported")
        self.lists.append((user_id, choices))

    def texts_to(self, user_id: str) -> list[str]:
        return [text for recipient, text in self.texts if recipient == user_id]

    @property
    def last_text(self) -> str:
        return self.texts[-1][1]


@pytest.fixture
def categories() -> list[Category]:
    return [
        Category(id="fried-snacks", name="Fried Snacks", emoji="🔥", description="Hot and crispy"),
        Category(id="pies", name="Pies", emoji="🥧", description="Savoury pies"),
        Category(id="empty", name="Empty Shelf", emoji="📦", description="Nothing here"),
    ]


@pytest.fixture
def products() -> list[Product]:
    return [
        Product(
            id="croquette",
            name="Chicken Croquette",
            price=Decimal("8.00"),
            category="fried-snacks",
            sizes=["6 units", "12 units"],
            images=["https://cdn.example.com/croquette.jpg"],
        ),
        Product(
            id="pastry",
            name="Cheese Pastry",
            price=Decimal("6.50"),
            category="fried-snacks",
            sizes=["6 units", "12 units"],
            colors=["Mozzarella", "Cheddar"],
        ),
        Product(
            id="chicken-pie",
            name="Chicken Pie",
            price=Decimal("45.00"),
            category="pies",
            colors=["Classic crust", "Whole wheat crust"],
        ),
        Product(id="veggie-pie", name="Veggie Pie", price=Decimal("40.00"), category="pies"),
        Product(
            id="shrimp",
            name="Shrimp Pastry",
            price=Decimal("9.50"),
            category="fried-snacks",
            in_stock=False,
        ),
    ]


@pytest.fixture
def catalog(categories, products) -> InMemoryCatalogStore:
    return InMemoryCatalogStore(categories, products)


@pytest.fixture
def store_config(categories) -> StoreConfig:
    return StoreConfig(attendant_id="attendant-1", categories=categories)


@pytest.fixture
def config(store_config) -> Config:
    cfg = Config(store=store_config)
    cfg.transport.image_timeout_sec = 0.5
    cfg.dispatcher.seen_message_window = 3
    return cfg


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def text():
    """Factory for plain text messages."""

    def _make(body: str, sender: str = "user-1", message_id: str | None = None) -> InboundMessage:
        return InboundMessage(sender=sender, body=body, message_id=message_id)

    return _make


@pytest.fixture
def tap():
    """Factory for list selections."""

    def _make(selection_id: str, sender: str = "user-1", body: str = "") -> InboundMessage:
        return InboundMessage(
            sender=sender, body=body, type="list_response", selection_id=selection_id
        )

    return _make
