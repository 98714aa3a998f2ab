"""Keyword vocabularies shared by the conversation flows."""

from __future__ import annotations

# Reset to the main menu from any depth.
HOME_KEYWORDS = frozenset({"menu", "home", "start"})
# Go one level up.
BACK_KEYWORDS = frozenset({"cancel", "back", "exit", "catalog", "products"})
CANCEL_KEYWORDS = HOME_KEYWORDS | BACK_KEYWORDS

CHECKOUT_TRIGGERS = frozenset({"order", "checkout", "place order", "finish"})

QUESTION_WORD_LIMIT = 6
QUESTION_WORDS = frozenset(
    {
        "price",
        "prices",
        "cost",
        "costs",
        "delivery",
        "deliver",
        "shipping",
        "payment",
        "pay",
        "hours",
        "open",
        "available",
        "when",
        "where",
        "what",
        "which",
        "how",
    }
)
QUESTION_PHRASES = ("how much", "do you", "can i", "could you", "would like")


def normalize(text: str) -> str:
    return " ".join(text.strip().lower().split())


def is_home(text: str) -> bool:
    return normalize(text) in HOME_KEYWORDS


def is_back(text: str) -> bool:
    return normalize(text) in BACK_KEYWORDS


def is_cancel(text: str) -> bool:
    return normalize(text) in CANCEL_KEYWORDS


def is_checkout_trigger(text: str) -> bool:
    return normalize(text) in CHECKOUT_TRIGGERS


def looks_like_question(text: str) -> bool:
    """Heuristic for free text that should go to the responder instead.

    A bare number of at most two characters is never a question.
    """
    stripped = text.strip()
    if not stripped:
        return False
    if stripped.isdecimal() and len(stripped) <= 2:
        return False
    if "?" in stripped:
        return True
    if len(stripped.split()) > QUESTION_WORD_LIMIT:
        return True
    lowered = normalize(stripped)
    words = {word.strip(".,!;:") for word in lowered.split()}
    if words & QUESTION_WORDS:
        return True
    return any(phrase in lowered for phrase in QUESTION_PHRASES)


__all__ = [
    "BACK_KEYWORDS",
    "CANCEL_KEYWORDS",
    "CHECKOUT_TRIGGERS",
    "HOME_KEYWORDS",
    "is_back",
    "is_cancel",
    "is_checkout_trigger",
    "is_home",
    "looks_like_question",
    "normalize",
]
