"""Cortex services: cart, checkout sessions and the message dispatcher."""

from .cart import CartService, CartTotals, LineItem, compute_totals
from .checkout_sessions import CheckoutSession, CheckoutSessionStore, CheckoutStep

__all__ = [
    "CartService",
    "CartTotals",
    "CheckoutSession",
    "CheckoutSessionStore",
    "CheckoutStep",
    "LineItem",
    "compute_totals",
]
