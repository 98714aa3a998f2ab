"""Checkout conversation flow."""

from .flow import CheckoutFlow
from .parsers import parse_address, parse_confirmation, parse_payment

__all__ = ["CheckoutFlow", "parse_address", "parse_confirmation", "parse_payment"]
