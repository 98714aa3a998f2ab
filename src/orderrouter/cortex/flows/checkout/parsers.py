"""Input parsers for the checkout steps. Invalid input raises `InputError`."""

from __future__ import annotations

from typing import Sequence

from orderrouter.core.exceptions import InputError

from ..navigation.keywords import normalize

PICKUP_KEYWORDS = frozenset({"pickup", "pick up", "collect", "collect in store", "store pickup"})
CONFIRM_YES = frozenset({"yes", "y", "1", "confirm"})
CONFIRM_NO = frozenset({"no", "n", "2"})


def parse_required(text: str, field: str) -> str:
    value = text.strip()
    if not value:
        raise InputError(f"{field} is required")
    return value


def parse_address(text: str, pickup_label: str) -> tuple[str, bool]:
    """Return the address to store and whether it is a pickup."""
    value = parse_required(text, "address")
    if normalize(value) in PICKUP_KEYWORDS:
        return pickup_label, True
    return value, False


def parse_payment(text: str, methods: Sequence[str]) -> tuple[str, bool]:
    """Map a 1-based option number to a payment label.

    Only option 1 is discount-eligible.
    """
    value = text.strip()
    if not value.isdecimal() or not 1 <= int(value) <= len(methods):
        raise InputError(f"invalid payment option: {value!r}")
    index = int(value) - 1
    return methods[index], index == 0


def parse_confirmation(text: str) -> bool:
    value = normalize(text)
    if value in CONFIRM_YES:
        return True
    if value in CONFIRM_NO:
        return False
    raise InputError(f"expected yes or no, got {value!r}")


__all__ = [
    "CONFIRM_NO",
    "CONFIRM_YES",
    "PICKUP_KEYWORDS",
    "parse_address",
    "parse_confirmation",
    "parse_payment",
    "parse_required",
]
