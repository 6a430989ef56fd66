"""Centralized configuration using Pydantic Settings.

This module provides a single source of truth for all configuration:
planner defaults and clamp bounds, where the application state is
stored, and how logging is set up.

Configuration can be overridden via environment variables:
- MP_PLANNER_BEAM_WIDTH=500
- MP_PLANNER_STRICT_TRANSITIONS=true
- MP_STORAGE_DATA_DIR=/path/to/data
- MP_LOG_LEVEL=DEBUG
- etc.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic import ValidationError as PydanticValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.errors import ConfigurationError
from .domain.models import Settings


class PlannerConfig(BaseSettings):
    """Planner defaults and the bounds user input is clamped to.

    Environment variables prefixed with MP_PLANNER_.
    """

    model_config = SettingsConfigDict(env_prefix="MP_PLANNER_")

    trailer_leeway_mins: int = Field(default=20, ge=0)
    travel_mins: int = Field(default=15, ge=0)
    max_results: int = Field(default=20, ge=0)
    beam_width: int = Field(default=200, ge=0)

    strict_transitions: bool = False
    max_results_cap: int = Field(default=200, ge=1)

    leeway_bounds: tuple[int, int] = (0, 120)
    travel_bounds: tuple[int, int] = (0, 240)
    max_results_bounds: tuple[int, int] = (1, 200)
    beam_width_bounds: tuple[int, int] = (50, 5000)
    runtime_bounds: tuple[int, int] = (1, 600)
    rank_bounds: tuple[int, int] = (1, 9999)

    def default_settings(self) -> Settings:
        """Return the settings a fresh application state starts with."""
        return Settings(
            trailer_leeway_mins=self.trailer_leeway_mins,
            travel_mins=self.travel_mins,
            max_results=self.max_results,
            beam_width=self.beam_width,
        )


class StorageConfig(BaseSettings):
    """Application state storage configuration.

    Environment variables prefixed with MP_STORAGE_.
    """

    model_config = SettingsConfigDict(env_prefix="MP_STORAGE_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    state_key: str = "movie_pathways_state_v1"

    @property
    def state_path(self) -> Path:
        """Full path to the JSON state document."""
        return self.data_dir / f"{self.state_key}.json"


class ObservabilityConfig(BaseSettings):
    """Logging and observability configuration.

    Environment variables prefixed with MP_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="MP_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = False  # Set True for JSON logging


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

    Sub-configurations can be accessed via attributes:

        config = get_config()
        print(config.planner.beam_width)
        print(config.storage.state_path)

    Environment variables prefixed with MP_.
    """

    model_config = SettingsConfigDict(env_prefix="MP_")

    planner: PlannerConfig = Field(default_factory=PlannerConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the singleton application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.

    Raises:
        ConfigurationError: If an environment override is invalid.
    """
    try:
        return AppConfig()
    except PydanticValidationError as e:
        errors = e.errors()
        setting = ".".join(str(part) for part in errors[0]["loc"]) if errors else ""
        raise ConfigurationError(
            "Invalid configuration",
            setting_name=setting,
            expected_type=errors[0]["type"] if errors else None,
            cause=e,
        )


def reset_config() -> None:
    """Reset the configuration cache.

    Call this in tests to ensure a fresh configuration is loaded.
    """
    get_config.cache_clear()
