"""
Environment-driven configuration.

Values come from the process environment, after loading a .env file
when one is found.
"""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from hawkin_cloud.sdk.exceptions import ConfigError
from hawkin_cloud.sdk.types import Region, resolve_region

logger = logging.getLogger(__name__)

ENV_LOCATIONS = (".env", "config/.env")


@dataclass
class HawkinConfig:
    """Credentials and runtime settings for the client and CLI."""

    refresh_token: str = ""
    region: Region = Region.AMERICAS
    log_output: str = "stdout"
    log_level: str = "INFO"
    log_file: str = "hawkin_cloud.log"
    window_days: int = 14

    @classmethod
    def from_env(cls, env_path: Optional[str] = None) -> "HawkinConfig":
        """Load configuration from a .env file and the environment.

        Raises:
            ConfigError: If HAWKIN_REGION or HAWKIN_WINDOW_DAYS is invalid
        """
        for loc in (env_path,) + ENV_LOCATIONS:
            if loc and os.path.exists(loc):
                load_dotenv(loc)
                logger.debug("Loaded config from: %s", loc)
                break

        window = os.getenv("HAWKIN_WINDOW_DAYS", "14")
        try:
            window_days = int(window)
        except ValueError:
            raise ConfigError(f"HAWKIN_WINDOW_DAYS must be an integer, got {window!r}")

        return cls(
            refresh_token=os.getenv("HAWKIN_REFRESH_TOKEN", ""),
            region=resolve_region(os.getenv("HAWKIN_REGION", Region.AMERICAS.value)),
            log_output=os.getenv("HAWKIN_LOG_OUTPUT", "stdout"),
            log_level=os.getenv("HAWKIN_LOG_LEVEL", "INFO"),
            log_file=os.getenv("HAWKIN_LOG_FILE", "hawkin_cloud.log"),
            window_days=window_days,
        )

    def validate(self) -> bool:
        """Check required settings."""
        if not self.refresh_token:
            raise ConfigError("Missing required config: HAWKIN_REFRESH_TOKEN")
        if self.window_days <= 0:
            raise ConfigError("HAWKIN_WINDOW_DAYS must be positive")
        return True
