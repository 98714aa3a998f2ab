"""State definition for the message dispatcher graph."""

from __future__ import annotations

import operator
from typing import Annotated, TypedDict

from orderrouter.core.types import InboundMessage
from orderrouter.cortex.presentation.actions import OutboundAction


class DispatchState(TypedDict):
    """State for one inbound message.

    Flow: checkout → [end|navigation]
          navigation → [end|checkout_trigger]
          checkout_trigger → [end|responder]
          responder → END
    """

    message: InboundMessage
    user_id: str
    # Outbound actions accumulated across nodes, delivered after the run.
    actions: Annotated[list[OutboundAction], operator.add]
    handled: bool
    checkout_requested: bool
    # Name of the node that claimed the message (for logging).
    handled_by: str | None


def initial_state(message: InboundMessage) -> DispatchState:
    return {
        "message": message,
        "user_id": message.sender,
        "actions": [],
        "handled": False,
        "checkout_requested": False,
        "handled_by": None,
    }


__all__ = ["DispatchState", "initial_state"]
