#!/usr/bin/env python3
"""
Configuration Management for Fork the Bill

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class StoreBackend(Enum):
    """Available expense store implementations."""

    JSON = "json"
    MEMORY = "memory"


@dataclass
class StoreConfig:
    """Expense store configuration."""

    backend: StoreBackend
    expenses_dir: Path


@dataclass
class Config:
    """
    Main configuration class for the bill splitter.

    Loads configuration from environment variables with defaults
    and validation for each environment type.
    """

    environment: Environment
    data_dir: Path
    store: StoreConfig

    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FORKTHEBILL_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_forkthebill"
            data_dir = Path(os.getenv("FORKTHEBILL_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("FORKTHEBILL_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        store = StoreConfig(
            backend=StoreBackend(os.getenv("FORKTHEBILL_STORE", "json").lower()),
            expenses_dir=data_dir / "expenses",
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            store=store,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if not isinstance(getattr(logging, self.log_level, None), int):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        if self.environment == Environment.PRODUCTION and self.store.backend == StoreBackend.MEMORY:
            errors.append("The memory store is not allowed in production")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.debug:
            logging.getLogger("forkthebill").setLevel(logging.DEBUG)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary for display."""
        return {
            "environment": self.environment.value,
            "data_dir": str(self.data_dir),
            "store": {
                "backend": self.store.backend.value,
                "expenses_dir": str(self.store.expenses_dir),
            },
            "debug": self.debug,
            "log_level": self.log_level,
        }


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def is_development() -> bool:
    """Check if running in development environment."""
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    """Check if running in production environment."""
    return get_config().environment == Environment.PRODUCTION
