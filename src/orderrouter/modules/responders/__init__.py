"""Natural-language responders."""

from .base import Responder, StaticResponder
from .chat_model import ChatModelResponder, create_chat_model

__all__ = ["ChatModelResponder", "Responder", "StaticResponder", "create_chat_model"]
