"""Configuration management using Pydantic."""
from pathlib import Path
from typing import Optional
from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
import yaml

from .constants import (
    DEFAULT_HOME_DIR,
    DEFAULT_HISTORY_DIR,
    DEFAULT_ANALYSIS_DELAY,
    DEFAULT_HISTORY_TIMEOUT,
    LOG_LEVELS,
    CONFIG_KEYS
)


class Settings(BaseSettings):
    """Application settings loaded from environment and config files."""

    model_config = SettingsConfigDict(
        env_prefix="GREENLIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        validate_assignment=True
    )

    # Storage paths
    catalog_dir: Optional[Path] = Field(
        default=None,
        description="Directory with YAML catalogs overriding the bundled ones"
    )
    history_dir: Path = Field(
        default=DEFAULT_HISTORY_DIR,
        description="Directory for concept version history"
    )

    # Analysis behaviour
    random_seed: Optional[int] = Field(
        default=None,
        description="Default seed for score and match jitter (None = nondeterministic)"
    )
    analysis_delay: float = Field(
        default=DEFAULT_ANALYSIS_DELAY,
        ge=0,
        description="Delay in seconds applied by the async analysis wrapper"
    )
    history_timeout: float = Field(
        default=DEFAULT_HISTORY_TIMEOUT,
        gt=0,
        description="Timeout in seconds for version history I/O"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level name."""
        v = v.upper()
        if v not in LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {', '.join(LOG_LEVELS)}")
        return v

    @field_validator('history_dir')
    @classmethod
    def create_directories(cls, v: Path) -> Path:
        """Ensure directories exist."""
        v = Path(v).expanduser().resolve()
        v.mkdir(parents=True, exist_ok=True)
        return v

    @field_validator('catalog_dir')
    @classmethod
    def validate_catalog_dir(cls, v: Optional[Path]) -> Optional[Path]:
        """Catalog override must point at an existing directory."""
        if v is None:
            return v
        v = Path(v).expanduser().resolve()
        if not v.is_dir():
            raise ValueError(f"Catalog directory not found: {v}")
        return v

    def load_config_file(self, config_path: Path) -> None:
        """
        Load additional settings from a YAML config file.

        Only CONFIG_KEYS are read; other keys are ignored.

        Raises:
            ValueError: If a value fails validation
        """
        if config_path.exists():
            with open(config_path) as f:
                config_data = yaml.safe_load(f) or {}

            for key, value in config_data.items():
                if key in CONFIG_KEYS:
                    setattr(self, key, value)

    def save_config_file(self, config_path: Path) -> None:
        """Save current settings to a YAML config file."""
        config_data = {
            'catalog_dir': str(self.catalog_dir) if self.catalog_dir else None,
            'history_dir': str(self.history_dir),
            'random_seed': self.random_seed,
            'analysis_delay': self.analysis_delay,
            'history_timeout': self.history_timeout,
            'log_level': self.log_level
        }

        with open(config_path, 'w') as f:
            yaml.dump(config_data, f, default_flow_style=False, sort_keys=False)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()

    # Load user config if it exists
    user_config = DEFAULT_HOME_DIR / 'config.yaml'
    if user_config.exists():
        settings.load_config_file(user_config)

    # Load project config if it exists
    project_config = Path('config.yaml')
    if project_config.exists():
        settings.load_config_file(project_config)

    return settings
