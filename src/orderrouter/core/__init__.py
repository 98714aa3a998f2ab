"""Core building blocks: configuration, exceptions, shared types and stores."""

from .config import Config, get_core_config, set_core_config
from .exceptions import OrderrouterError
from .session_store import InMemoryStore, KeyedStore
from .types import Category, InboundMessage, Product

__all__ = [
    "Config",
    "get_core_config",
    "set_core_config",
    "OrderrouterError",
    "InMemoryStore",
    "KeyedStore",
    "Category",
    "InboundMessage",
    "Product",
]
