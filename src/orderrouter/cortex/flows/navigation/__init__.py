"""Catalog browsing and cart-building conversation flow."""

from .machine import NavigationMachine
from .state import (
    AddingToCart,
    AddStep,
    AfterAddToCart,
    BrowsingCategories,
    Idle,
    NavigationState,
    ViewingProductDetails,
    ViewingProducts,
)

__all__ = [
    "AddStep",
    "AddingToCart",
    "AfterAddToCart",
    "BrowsingCategories",
    "Idle",
    "NavigationMachine",
    "NavigationState",
    "ViewingProductDetails",
    "ViewingProducts",
]
