"""Per-user cart aggregate.

Lines are merged on ``(product_id, size, variant)``. Money is kept as
``Decimal`` throughout; the only rounding happens when amounts are formatted
for display.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from decimal import Decimal
from enum import Enum
from typing import Sequence

from orderrouter.core.exceptions import CatalogLookupError, OutOfStock, ProductNotFound
from orderrouter.core.session_store import InMemoryStore, KeyedStore
from orderrouter.modules.catalog.base import CatalogStore

logger = logging.getLogger(__name__)

DISCOUNT_RATE = Decimal("0.05")
UNIT_SIZE = "Unit"
DEFAULT_VARIANT = "Standard"

_CENT = Decimal("0.01")


def format_money(amount: Decimal) -> str:
    return f"${amount.quantize(_CENT):,}"



@dataclass(frozen=True)
class LineItem:
    product_id: str
    name: str
    unit_price: Decimal
    size: str
    variant: str
    quantity: int = 1

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def same_selection(self, product_id: str, size: str, variant: str) -> bool:
        return (self.product_id, self.size, self.variant) == (product_id, size, variant)


@dataclass(frozen=True)
class CartTotals:
    subtotal: Decimal
    discount: Decimal
    total: Decimal


class AddItemStatus(str, Enum):
    ADDED = "added"
    MERGED = "merged"
    PRODUCT_NOT_FOUND = "product_not_found"
    OUT_OF_STOCK = "out_of_stock"


@dataclass(frozen=True)
class AddItemResult:
    status: AddItemStatus
    line: LineItem | None = None
    error: CatalogLookupError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def format_line_items(lines: Sequence[LineItem]) -> list[str]:
    """Numbered cart lines; the variant is shown only when it is not the default."""
    formatted = []
    for i, line in enumerate(lines, 1):
        detail = line.size if line.variant == DEFAULT_VARIANT else f"{line.size}, {line.variant}"
        formatted.append(
            f"{i}. {line.name} ({detail}) x{line.quantity} | {format_money(line.line_total)}"
        )
    return formatted


def compute_totals(lines: Sequence[LineItem], discount_eligible: bool) -> CartTotals:
    """Subtotal, discount and total for a set of lines.

    The total is computed as ``subtotal - subtotal * rate`` so the discounted
    total always equals the standard total times ``1 - rate`` exactly.
    """
    subtotal = sum((line.line_total for line in lines), Decimal("0"))
    discount = subtotal * DISCOUNT_RATE if discount_eligible else Decimal("0")
    return CartTotals(subtotal=subtotal, discount=discount, total=subtotal - discount)


class CartService:
    """Owns every user's cart. Only this class mutates cart contents."""

    def __init__(
        self,
        catalog: CatalogStore,
        store: KeyedStore[tuple[LineItem, ...]] | None = None,
    ) -> None:
        self._catalog = catalog
        self._store: KeyedStore[tuple[LineItem, ...]] = (
            store if store is not None else InMemoryStore(name="carts")
        )

    async def add_item(
        self,
        user_id: str,
        product_id: str,
        size: str,
        variant: str,
        quantity: int = 1,
    ) -> AddItemResult:
        """Add a product to the user's cart.

        Catalog misses come back as a failed result rather than an exception.
        """
        if quantity < 1:
            raise ValueError("quantity must be >= 1")

        product = await self._catalog.get_product_by_id(product_id)
        if product is None:
            logger.info("Add to cart failed for %s: product %s not found", user_id, product_id)
            return AddItemResult(
                AddItemStatus.PRODUCT_NOT_FOUND, error=ProductNotFound(product_id)
            )
        if not product.in_stock:
            logger.info("Add to cart failed for %s: product %s out of stock", user_id, product_id)
            return AddItemResult(AddItemStatus.OUT_OF_STOCK, error=OutOfStock(product_id))

        lines = list(await self.list_items(user_id))
        for index, line in enumerate(lines):
            if line.same_selection(product_id, size, variant):
                merged = replace(line, quantity=line.quantity + quantity)
                lines[index] = merged
                await self._store.set(user_id, tuple(lines))
                return AddItemResult(AddItemStatus.MERGED, line=merged)

        added = LineItem(
            product_id=product.id,
            name=product.name,
            unit_price=product.price,
            size=size,
            variant=variant,
            quantity=quantity,
        )
        lines.append(added)
        await self._store.set(user_id, tuple(lines))
        logger.debug("Cart for %s now has %d lines", user_id, len(lines))
        return AddItemResult(AddItemStatus.ADDED, line=added)

    async def list_items(self, user_id: str) -> tuple[LineItem, ...]:
        return await self._store.get(user_id) or ()

    async def remove_item(self, user_id: str, index: int) -> bool:
        """Remove the line at zero-based `index`. Returns False when out of range."""
        lines = list(await self.list_items(user_id))
        if index < 0 or index >= len(lines):
            return False
        del lines[index]
        await self._store.set(user_id, tuple(lines))
        return True

    async def clear(self, user_id: str) -> None:
        await self._store.delete(user_id)

    async def is_empty(self, user_id: str) -> bool:
        return not await self.list_items(user_id)

    async def compute_totals(self, user_id: str, discount_eligible: bool) -> CartTotals:
        return compute_totals(await self.list_items(user_id), discount_eligible)

    async def cart_context(self, user_id: str) -> dict[str, object] | None:
        """Item count and subtotal for the responder, or None for an empty cart."""
        lines = await self.list_items(user_id)
        if not lines:
            return None
        return {
            "item_count": sum(line.quantity for line in lines),
            "subtotal": compute_totals(lines, False).subtotal,
        }


__all__ = [
    "AddItemResult",
    "AddItemStatus",
    "CartService",
    "CartTotals",
    "DEFAULT_VARIANT",
    "DISCOUNT_RATE",
    "LineItem",
    "UNIT_SIZE",
    "compute_totals",
    "format_line_items",
    "format_money",
]
