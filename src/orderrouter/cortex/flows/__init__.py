"""Conversation flows: navigation and checkout state machines."""

from .checkout import CheckoutFlow
from .navigation import NavigationMachine

__all__ = ["CheckoutFlow", "NavigationMachine"]
