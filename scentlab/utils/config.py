"""Configuration management for the fragrance recipe engine.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os
from typing import Optional

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        # Catalog Path: optional JSON file with a "personas" list that replaces the built-in catalog
        self.CATALOG_PATH: Optional[str] = os.getenv("CATALOG_PATH") or None
        # Default Retention: share of the base profile kept when feedback omits it (0-100). Default: 50
        self.DEFAULT_RETENTION_PERCENTAGE: int = int(os.getenv("DEFAULT_RETENTION_PERCENTAGE", "50"))
        # Output Format: "markdown" or "json". Default: "markdown"
        # "markdown": human-readable recipe card for the command-line runner
        # "json": camelCase record as consumed by the web application
        self.OUTPUT_FORMAT: str = os.getenv("OUTPUT_FORMAT", "markdown").lower()
        # Amount Unit: suffix appended to formatted ingredient masses. Default: "g"
        self.AMOUNT_UNIT: str = os.getenv("AMOUNT_UNIT", "g")

    def validate(self) -> None:
        """Validate configuration values.

        Raises:
            ValueError: If a value is out of range or points at a missing file.
        """
        if not (0 <= self.DEFAULT_RETENTION_PERCENTAGE <= 100):
            raise ValueError(
                f"DEFAULT_RETENTION_PERCENTAGE must be between 0 and 100, got: {self.DEFAULT_RETENTION_PERCENTAGE}"
            )
        if self.OUTPUT_FORMAT not in ("markdown", "json"):
            raise ValueError(
                f"OUTPUT_FORMAT must be 'markdown' or 'json', got: {self.OUTPUT_FORMAT}"
            )
        if not self.AMOUNT_UNIT.strip():
            raise ValueError("AMOUNT_UNIT must not be empty")
        if self.CATALOG_PATH and not os.path.isfile(self.CATALOG_PATH):
            raise ValueError(f"CATALOG_PATH does not point to a file: {self.CATALOG_PATH}")


# Create module-level config instance and validate immediately
config = Config()
config.validate()
