"""Main configuration class that combines all config modules."""

import logging
import tomllib
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from .base import ENV_PREFIX, get_bool_env, get_env, get_float_env
from .models import GoogleConfig, LLMConfig, ModelsConfig
from .store import CatalogConfig, DispatcherConfig, StoreConfig, TransportConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "settings.toml"


class Config(BaseModel):
    """Main configuration class for orderrouter.

    Configuration is loaded from multiple sources in priority order:
    1. Environment variables
    2. TOML configuration file
    3. Default values
    """

    model_config = ConfigDict(extra="ignore")

    # Core settings
    debug: bool = False
    log_level: str = "INFO"

    # Sub-configurations
    store: StoreConfig = Field(default_factory=StoreConfig)
    models: ModelsConfig = Field(default_factory=ModelsConfig)
    llm: LLMConfig = Field(default_factory=LLMConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    transport: TransportConfig = Field(default_factory=TransportConfig)
    dispatcher: DispatcherConfig = Field(default_factory=DispatcherConfig)

    # Provider configurations
    google: GoogleConfig = Field(default_factory=GoogleConfig)

    # Internal state
    loaded_from: list[Path] = Field(default_factory=list)

    @classmethod
    def load(cls, config_path: Path | str | None = None) -> "Config":
        """Load configuration from files and environment."""
        load_dotenv()

        config = cls()

        explicit = config_path or get_env(f"{ENV_PREFIX}CONFIG_PATH")
        toml_path = Path(explicit) if explicit else Path.cwd() / DEFAULT_CONFIG_FILE
        if toml_path.exists():
            try:
                with open(toml_path, "rb") as f:
                    toml_data = tomllib.load(f)

                config_dict = config.model_dump()
                for section, values in toml_data.items():
                    if isinstance(values, dict) and isinstance(config_dict.get(section), dict):
                        config_dict[section].update(values)
                    else:
                        config_dict[section] = values
                config = cls.model_validate(config_dict)
                config.loaded_from.append(toml_path)
            except (OSError, tomllib.TOMLDecodeError, ValueError) as e:
                logger.warning("Failed to load TOML config from %s: %s", toml_path, e)

        # Override with environment variables
        config._apply_env_overrides()

        return config

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides to config."""
        # Model configuration
        if llm_val := get_env(f"{ENV_PREFIX}RESPONDER_LLM"):
            self.models.responder_llm = llm_val
        if (temperature := get_float_env(f"{ENV_PREFIX}LLM_TEMPERATURE")) is not None:
            self.llm.temperature = temperature
        if (timeout := get_float_env(f"{ENV_PREFIX}LLM_TIMEOUT_SEC")) is not None:
            self.llm.timeout_sec = timeout

        # Google configuration
        if api_key := (get_env("GOOGLE_API_KEY") or get_env("GEMINI_API_KEY")):
            self.google.api_key = api_key

        # Store configuration
        if store_name := get_env(f"{ENV_PREFIX}STORE_NAME"):
            self.store.name = store_name
        if attendant := get_env(f"{ENV_PREFIX}ATTENDANT_ID"):
            self.store.attendant_id = attendant
        if phone := get_env(f"{ENV_PREFIX}CONTACT_PHONE"):
            self.store.contact_phone = phone

        # Catalog configuration
        if catalog_path := get_env(f"{ENV_PREFIX}CATALOG_PATH"):
            self.catalog.path = catalog_path
        if catalog_url := get_env(f"{ENV_PREFIX}CATALOG_URL"):
            self.catalog.url = catalog_url

        # Transport configuration
        if image_base := get_env(f"{ENV_PREFIX}IMAGE_BASE_URL"):
            self.transport.image_base_url = image_base

        # Debug/Logging
        if (debug_val := get_bool_env(f"{ENV_PREFIX}DEBUG")) is not None:
            self.debug = debug_val
        if log_level := get_env(f"{ENV_PREFIX}LOG_LEVEL"):
            self.log_level = log_level


# ---- Global config management ----

_GLOBAL_CONFIG: Config | None = None


def get_core_config() -> Config:
    """Return process-global core config."""
    global _GLOBAL_CONFIG
    if _GLOBAL_CONFIG is None:
        _GLOBAL_CONFIG = Config.load()
    return _GLOBAL_CONFIG


def set_core_config(config: Config | None) -> None:
    """Set (or with `None`, reset) the global core config."""
    global _GLOBAL_CONFIG
    _GLOBAL_CONFIG = config
