"""
Runtime settings and logging setup.

Settings come from environment variables, optionally loaded from a .env
file in the working directory.
"""

import logging
import os
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from typing import Optional

from dotenv import load_dotenv

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class Settings:
    """Application settings."""

    log_level: str = "INFO"
    log_dir: Optional[str] = None  # Console only when unset
    default_profit_percentage: float = 25.0
    host: str = "127.0.0.1"
    port: int = 5000
    secret_key: str = "dev-secret-key-change-in-production"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None, load_env_file: bool = True) -> "Settings":
        """
        Build settings from COSTBOOK_* environment variables.

        Args:
            env_file: Explicit .env path (searched for if omitted)
            load_env_file: Load a .env file first (default: True)

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        if load_env_file:
            load_dotenv(env_file)

        try:
            default_profit = float(os.environ.get("COSTBOOK_DEFAULT_PROFIT", "25"))
            port = int(os.environ.get("COSTBOOK_PORT", "5000"))
        except ValueError as e:
            raise ValueError(f"Invalid numeric setting in environment: {e}") from e

        return cls(
            log_level=os.environ.get("COSTBOOK_LOG_LEVEL", "INFO").upper(),
            log_dir=os.environ.get("COSTBOOK_LOG_DIR") or None,
            default_profit_percentage=default_profit,
            host=os.environ.get("COSTBOOK_HOST", "127.0.0.1"),
            port=port,
            secret_key=os.environ.get("FLASK_SECRET_KEY", cls.secret_key),
        )


def configure_logging(settings: Settings) -> None:
    """Setup logging with console output and, if configured, a rotating log file."""
    handlers = [logging.StreamHandler()]
    if settings.log_dir:
        os.makedirs(settings.log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                os.path.join(settings.log_dir, "costbook.log"),
                maxBytes=10*1024*1024,  # 10MB
                backupCount=5
            )
        )

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
