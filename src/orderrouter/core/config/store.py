"""Storefront, catalog, transport and dispatcher configuration."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..types import Category


def _default_categories() -> list[Category]:
    return [
        Category(
            id="fried-snacks",
            name="Fried Snacks",
            emoji="🔥",
            description="Croquettes, pastries, fritters and more",
        ),
        Category(
            id="frozen-snacks",
            name="Frozen Snacks",
            emoji="❄️",
            description="Ready to fry at home",
        ),
        Category(
            id="pies",
            name="Pies",
            emoji="🥧",
            description="Assorted savoury pies",
        ),
        Category(
            id="special-orders",
            name="Special Orders",
            emoji="📦",
            description="Parties, events and bulk quantities",
        ),
    ]


class StoreConfig(BaseModel):
    """Everything customer-facing text is composed from."""

    model_config = ConfigDict(extra="ignore")

    name: str = "Corner Snack Shop"
    tagline: str = "Fresh snacks, made with love."
    city: str = "Downtown"
    contact_phone: str = "+1 555 010 0199"
    # Transport recipient id that receives new-order notifications.
    attendant_id: str = ""
    business_hours: str = "Mon-Sat 8am-8pm, Sun 8am-2pm"
    order_lead_time: str = "24 hours"
    pickup_label: str = "Store pickup"
    payment_methods: list[str] = Field(
        default_factory=lambda: ["Pix", "Credit card", "Debit card", "Cash"]
    )
    categories: list[Category] = Field(default_factory=_default_categories)

    @field_validator("payment_methods")
    @classmethod
    def _exactly_four(cls, value: list[str]) -> list[str]:
        if len(value) != 4:
            raise ValueError("store.payment_methods must list exactly four options")
        return value


class CatalogConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    path: str = "data/catalog.json"
    url: str = ""
    cache_ttl_sec: float = 30.0
    timeout_sec: float = 10.0


class TransportConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    image_timeout_sec: float = 15.0
    # Prefix for catalog image paths that are not absolute URLs.
    image_base_url: str = ""


class DispatcherConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    seen_message_window: int = 1000
