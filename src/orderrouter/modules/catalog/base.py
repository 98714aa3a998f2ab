"""Read-only catalog interface consumed by the conversation engine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from orderrouter.core.types import Category, Product


class CatalogStore(ABC):
    """Catalog lookup.

    Providers must implement `get_categories()` and `get_all_products()`; the
    per-category and per-id lookups derive from those unless overridden.
    """

    @abstractmethod
    async def get_categories(self) -> Sequence[Category]:
        raise NotImplementedError

    @abstractmethod
    async def get_all_products(self) -> Sequence[Product]:
        raise NotImplementedError

    async def get_products_by_category(self, category_id: str) -> list[Product]:
        """In-stock products of one category, in catalog order."""
        products = await self.get_all_products()
        return [p for p in products if p.category == category_id and p.in_stock]

    async def get_product_by_id(self, product_id: str) -> Product | None:
        for product in await self.get_all_products():
            if product.id == product_id:
                return product
        return None

    async def get_category(self, category_id: str) -> Category | None:
        for category in await self.get_categories():
            if category.id == category_id:
                return category
        return None


class InMemoryCatalogStore(CatalogStore):
    """Fixed catalog held in memory."""

    def __init__(self, categories: Sequence[Category], products: Sequence[Product]) -> None:
        self._categories = list(categories)
        self._products = list(products)

    async def get_categories(self) -> list[Category]:
        return list(self._categories)

    async def get_all_products(self) -> list[Product]:
        return list(self._products)


__all__ = ["CatalogStore", "InMemoryCatalogStore"]
