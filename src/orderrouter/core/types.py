"""Shared value types: catalog entities and inbound messages."""

from __future__ import annotations

from decimal import Decimal
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

MessageType = Literal["chat", "list_response"]


class Category(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    name: str
    emoji: str = ""
    description: str = ""


class Product(BaseModel):
    """Catalog product as read from the catalog store.

    `sizes` and `variants` are stored as (possibly empty) tuples; callers should
    use `size_options` / `variant_options`, which collapse "empty" to `None` so
    "has no sizes" is a single unambiguous case.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    id: str
    name: str
    price: Decimal
    description: str = ""
    category: str = ""
    sizes: tuple[str, ...] = ()
    # The catalog JSON historically calls variants "colors".
    variants: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("variants", "colors")
    )
    images: tuple[str, ...] = ()
    in_stock: bool = Field(default=True, validation_alias=AliasChoices("in_stock", "inStock"))

    @field_validator("sizes", "variants", "images", mode="before")
    @classmethod
    def _drop_blank(cls, value: object) -> object:
        if value is None:
            return ()
        if isinstance(value, (list, tuple)):
            return tuple(str(v).strip() for v in value if str(v).strip())
        return value

    @property
    def size_options(self) -> tuple[str, ...] | None:
        return self.sizes or None

    @property
    def variant_options(self) -> tuple[str, ...] | None:
        return self.variants or None


class InboundMessage(BaseModel):
    """One message received from the transport."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    sender: str = Field(validation_alias=AliasChoices("sender", "from"))
    body: str = ""
    type: MessageType = "chat"
    selection_id: str | None = None
    message_id: str | None = None

    @property
    def text(self) -> str:
        return self.body.strip()

    @property
    def is_selection(self) -> bool:
        return self.type == "list_response" and bool(self.selection_id)


__all__ = ["Category", "InboundMessage", "MessageType", "Product"]
