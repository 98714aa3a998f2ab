"""Tap-to-select choice lists with a numbered plain-text fallback.

A `ChoiceList` is rendered by the transport as a native list message when it
can; otherwise it is flattened into one text message with a global 1-based
ordinal per row. Replies are resolved the same way regardless of which
rendering the user actually saw.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from orderrouter.modules.transports.base import Transport

logger = logging.getLogger(__name__)

KEYCAP = "️⃣"
FALLBACK_HINT = "💬 Type the option number"


@dataclass(frozen=True)
class ChoiceRow:
    label: str
    selection_id: str
    description: str = ""


@dataclass(frozen=True)
class ChoiceSection:
    title: str
    rows: tuple[ChoiceRow, ...]


@dataclass(frozen=True)
class ChoiceList:
    prompt: str
    sections: tuple[ChoiceSection, ...]
    footer: str = ""
    button_text: str = "Choose"

    def rows(self) -> Iterator[ChoiceRow]:
        """All rows in display order, across sections."""
        for section in self.sections:
            yield from section.rows

    def __len__(self) -> int:
        return sum(len(section.rows) for section in self.sections)


def single_section(
    title: str,
    rows: list[ChoiceRow] | tuple[ChoiceRow, ...],
    *,
    prompt: str,
    footer: str = "",
    button_text: str = "Choose",
) -> ChoiceList:
    return ChoiceList(
        prompt=prompt,
        sections=(ChoiceSection(title=title, rows=tuple(rows)),),
        footer=footer,
        button_text=button_text,
    )


def render_fallback_text(choices: ChoiceList) -> str:
    """Flatten a choice list into a single numbered text message."""
    parts: list[str] = []
    if choices.prompt:
        parts.append(choices.prompt)
        parts.append("")

    ordinal = 1
    for section in choices.sections:
        if section.title:
            parts.append(f"*{section.title}*")
        for row in section.rows:
            line = f"{ordinal}{KEYCAP} {row.label}"
            if row.description:
                line = f"{line} — {row.description}"
            parts.append(line)
            ordinal += 1
        parts.append("")

    parts.append(FALLBACK_HINT)
    if choices.footer:
        parts.append("")
        parts.append(choices.footer)
    return "\n".join(parts)


def resolve_choice(
    choices: ChoiceList,
    selection_id: str | None,
    text: str | None,
) -> ChoiceRow | None:
    """Match a reply against a presented list.

    Tries the structured selection id, then a global 1-based ordinal, then a
    case-insensitive exact label match. Returns None when nothing matches.
    """
    rows = list(choices.rows())

    if selection_id:
        for row in rows:
            if row.selection_id == selection_id:
                return row

    value = (text or "").strip()
    if not value:
        return None

    if value.isdecimal():
        ordinal = int(value)
        if 1 <= ordinal <= len(rows):
            return rows[ordinal - 1]
        return None

    folded = value.casefold()
    for row in rows:
        if row.label.casefold() == folded:
            return row
    return None


async def present_choices(transport: "Transport", user_id: str, choices: ChoiceList) -> bool:
    """Send a choice list, degrading to numbered text.

    Returns True when the native list was delivered, False when the fallback
    text was sent instead. A failure of the fallback send itself propagates.
    """
    try:
        await transport.send_list(user_id, choices)
        return True
    except Exception as e:
        logger.warning("List delivery to %s failed, sending text fallback: %s", user_id, e)

    await transport.send_text(user_id, render_fallback_text(choices))
    return False


__all__ = [
    "ChoiceList",
    "ChoiceRow",
    "ChoiceSection",
    "present_choices",
    "render_fallback_text",
    "resolve_choice",
    "single_section",
]
