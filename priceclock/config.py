"""PriceClock configuration management.

Loads configuration from environment variables with sensible defaults.
Nothing is required: an unconfigured process serves an empty catalog.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from priceclock.pricing.engine import LookupStrategy

# Load .env file if present
load_dotenv()


@dataclass
class IngestionConfig:
    """Upload limits for offer batches."""

    allowed_suffixes: tuple[str, ...] = (".tsv", ".txt")
    max_upload_bytes: int = 10 * 1024 * 1024
    bootstrap_file: Path | None = None  # loaded once at web startup


@dataclass
class QueryConfig:
    """Point query settings."""

    strategy: LookupStrategy = LookupStrategy.BISECT


@dataclass
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    log_format: str = "text"  # json or text

    ingestion: IngestionConfig = field(default_factory=IngestionConfig)
    query: QueryConfig = field(default_factory=QueryConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - LOG_LEVEL: Logging verbosity (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")
        - PRICECLOCK_LOOKUP_STRATEGY: "bisect" or "linear" (default: "bisect")
        - PRICECLOCK_UPLOAD_SUFFIXES: comma-separated (default: ".tsv,.txt")
        - PRICECLOCK_MAX_UPLOAD_BYTES: upload size cap (default: 10 MiB)
        - PRICECLOCK_BOOTSTRAP_FILE: offer batch to load at web startup

        Raises:
            ValueError: If a value is present but invalid
        """
        log_format = os.getenv("LOG_FORMAT", "text").lower()
        if log_format not in ("text", "json"):
            raise ValueError(f"LOG_FORMAT must be 'text' or 'json', got: {log_format!r}")

        strategy_name = os.getenv("PRICECLOCK_LOOKUP_STRATEGY", "bisect").lower()
        try:
            strategy = LookupStrategy(strategy_name)
        except ValueError:
            raise ValueError(
                f"PRICECLOCK_LOOKUP_STRATEGY must be one of "
                f"{[s.value for s in LookupStrategy]}, got: {strategy_name!r}"
            ) from None

        suffixes = tuple(
            s.strip().lower()
            for s in os.getenv("PRICECLOCK_UPLOAD_SUFFIXES", ".tsv,.txt").split(",")
            if s.strip()
        )

        max_upload_bytes = int(os.getenv("PRICECLOCK_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
        if max_upload_bytes <= 0:
            raise ValueError("PRICECLOCK_MAX_UPLOAD_BYTES must be positive")

        bootstrap = os.getenv("PRICECLOCK_BOOTSTRAP_FILE")

        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=log_format,
            ingestion=IngestionConfig(
                allowed_suffixes=suffixes,
                max_upload_bytes=max_upload_bytes,
                bootstrap_file=Path(bootstrap) if bootstrap else None,
            ),
            query=QueryConfig(strategy=strategy),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment.

    Returns:
        AppConfig: Application configuration

    Raises:
        ValueError: If an environment value is invalid
    """
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    global _config
    _config = None
