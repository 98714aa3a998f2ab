"""Modular configuration system for orderrouter."""

from .base import (
    get_bool_env,
    get_env,
)
from .main import (
    Config,
    get_core_config,
    set_core_config,
)
from .models import (
    GoogleConfig,
    LLMConfig,
    ModelsConfig,
)
from .store import (
    CatalogConfig,
    DispatcherConfig,
    StoreConfig,
    TransportConfig,
)

__all__ = [
    # Main classes
    "Config",
    # Main functions
    "get_core_config",
    "set_core_config",
    # Base utilities
    "get_env",
    "get_bool_env",
    # Model configs
    "ModelsConfig",
    "LLMConfig",
    # Provider configs
    "GoogleConfig",
    # Storefront configs
    "StoreConfig",
    "CatalogConfig",
    "TransportConfig",
    "DispatcherConfig",
]
