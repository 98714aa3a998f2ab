"""Navigation states.

Each state is its own frozen dataclass carrying exactly the context it needs.
Transitions store a new value; nothing is merged into an old one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from orderrouter.core.types import Category, Product


class AddStep(str, Enum):
    SIZE = "size"
    VARIANT = "variant"


@dataclass(frozen=True)
class Idle:
    name = "idle"


@dataclass(frozen=True)
class BrowsingCategories:
    name = "browsing_categories"


@dataclass(frozen=True)
class ViewingProducts:
    category: Category
    name = "viewing_products"


@dataclass(frozen=True)
class ViewingProductDetails:
    category: Category
    product: Product
    name = "viewing_product_details"


@dataclass(frozen=True)
class AddingToCart:
    category: Category
    product: Product
    step: AddStep
    size: str | None = None
    name = "adding_to_cart"


@dataclass(frozen=True)
class AfterAddToCart:
    name = "after_add_to_cart"


NavigationState = Union[
    Idle,
    BrowsingCategories,
    ViewingProducts,
    ViewingProductDetails,
    AddingToCart,
    AfterAddToCart,
]

IDLE = Idle()


__all__ = [
    "AddStep",
    "AddingToCart",
    "AfterAddToCart",
    "BrowsingCategories",
    "IDLE",
    "Idle",
    "NavigationState",
    "ViewingProductDetails",
    "ViewingProducts",
]
