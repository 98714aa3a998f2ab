"""Outbound actions and their delivery.

State machines never talk to the transport. They return a `Reply` holding
actions; `deliver()` is the only place those actions turn into sends.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence, Union

from .choices import ChoiceList, present_choices

if TYPE_CHECKING:
    from orderrouter.modules.transports.base import Transport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutboundText:
    text: str
    # Recipient override; None means the user whose message is being handled.
    to: str | None = None
    # Failures are logged instead of raised (attendant notifications).
    best_effort: bool = False


@dataclass(frozen=True)
class OutboundImage:
    url: str
    caption: str = ""


@dataclass(frozen=True)
class OutboundChoices:
    choices: ChoiceList


OutboundAction = Union[OutboundText, OutboundImage, OutboundChoices]


@dataclass(frozen=True)
class Reply:
    """Result of offering one message to a state machine."""

    handled: bool
    actions: tuple[OutboundAction, ...] = ()
    checkout_requested: bool = False

    @classmethod
    def not_handled(cls) -> "Reply":
        return cls(handled=False)

    @classmethod
    def of(cls, *actions: OutboundAction, checkout_requested: bool = False) -> "Reply":
        return cls(handled=True, actions=tuple(actions), checkout_requested=checkout_requested)

    @classmethod
    def text(cls, text: str) -> "Reply":
        return cls.of(OutboundText(text))


@dataclass
class DeliveryReport:
    sent: int = 0
    degraded: int = 0
    failed_best_effort: int = 0
    errors: list[str] = field(default_factory=list)


async def _send_image(
    transport: "Transport",
    user_id: str,
    action: OutboundImage,
    image_timeout: float,
) -> bool:
    try:
        await asyncio.wait_for(
            transport.send_image(user_id, action.url, action.caption),
            timeout=image_timeout,
        )
        return True
    except asyncio.TimeoutError:
        logger.warning(
            "Image send to %s timed out after %.1fs: %s", user_id, image_timeout, action.url
        )
    except Exception as e:
        logger.warning("Image send to %s failed: %s", user_id, e)

    if action.caption:
        await transport.send_text(user_id, action.caption)
    return False


async def deliver(
    transport: "Transport",
    user_id: str,
    actions: Sequence[OutboundAction],
    *,
    image_timeout: float = 15.0,
) -> DeliveryReport:
    """Send actions in order.

    Images fall back to their caption and choice lists to numbered text.
    Best-effort texts to other recipients never raise. Any other send failure
    propagates to the caller.
    """
    report = DeliveryReport()
    for action in actions:
        if isinstance(action, OutboundImage):
            if await _send_image(transport, user_id, action, image_timeout):
                report.sent += 1
            else:
                report.degraded += 1
        elif isinstance(action, OutboundChoices):
            if await present_choices(transport, user_id, action.choices):
                report.sent += 1
            else:
                report.degraded += 1
        elif isinstance(action, OutboundText):
            recipient = action.to or user_id
            if not action.best_effort:
                await transport.send_text(recipient, action.text)
                report.sent += 1
                continue
            try:
                await transport.send_text(recipient, action.text)
                report.sent += 1
            except Exception as e:
                logger.error("Best-effort message to %s failed: %s", recipient, e)
                report.failed_best_effort += 1
                report.errors.append(str(e))
        else:
            raise TypeError(f"Unsupported outbound action: {type(action).__name__}")
    return report


__all__ = [
    "DeliveryReport",
    "OutboundAction",
    "OutboundChoices",
    "OutboundImage",
    "OutboundText",
    "Reply",
    "deliver",
]
