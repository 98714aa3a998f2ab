"""Routing functions for dispatcher graph edges."""

from __future__ import annotations

from typing import Literal

from .state import DispatchState


def after_checkout(state: DispatchState) -> Literal["end", "navigation"]:
    return "end" if state["handled"] else "navigation"


def after_navigation(state: DispatchState) -> Literal["end", "checkout_trigger"]:
    """Navigation may hand over to checkout even when it consumed the message."""
    if state.get("checkout_requested"):
        return "checkout_trigger"
    return "end" if state["handled"] else "checkout_trigger"


def after_checkout_trigger(state: DispatchState) -> Literal["end", "responder"]:
    return "end" if state["handled"] else "responder"


__all__ = ["after_checkout", "after_checkout_trigger", "after_navigation"]
