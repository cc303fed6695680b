"""Configuration and logging setup."""

from __future__ import annotations
from dataclasses import dataclass, field
import logging
import os
import sys


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class Settings:
    """
    Runtime settings, read from the environment by from_env().

    Environment:
        UNO_ENV          development / production
        HOST, PORT       bind address for `unotable serve`
        ALLOWED_ORIGINS  comma-separated CORS origins
        UNO_STORE_DIR    directory for JsonFileStore; unset keeps nothing
        UNO_LOG_LEVEL    DEBUG, INFO, WARNING, ERROR
        UNO_SEED         integer seed for reproducible shuffles
    """
    env: str = "development"
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    store_dir: str | None = None
    log_level: str = "INFO"
    seed: int | None = None

    @classmethod
    def from_env(cls) -> Settings:
        seed = os.getenv("UNO_SEED")
        return cls(
            env=os.getenv("UNO_ENV", "development"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "8000")),
            allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS", "*")),
            store_dir=os.getenv("UNO_STORE_DIR") or None,
            log_level=os.getenv("UNO_LOG_LEVEL", "INFO"),
            seed=int(seed) if seed else None,
        )


def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
