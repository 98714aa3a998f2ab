"""Choice lists, outbound actions and delivery."""

from .actions import (
    DeliveryReport,
    OutboundAction,
    OutboundChoices,
    OutboundImage,
    OutboundText,
    Reply,
    deliver,
)
from .choices import (
    ChoiceList,
    ChoiceRow,
    ChoiceSection,
    present_choices,
    render_fallback_text,
    resolve_choice,
    single_section,
)

__all__ = [
    "ChoiceList",
    "ChoiceRow",
    "ChoiceSection",
    "DeliveryReport",
    "OutboundAction",
    "OutboundChoices",
    "OutboundImage",
    "OutboundText",
    "Reply",
    "deliver",
    "present_choices",
    "render_fallback_text",
    "resolve_choice",
    "single_section",
]
