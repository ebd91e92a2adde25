"""Configuration for the thing command service.

Settings come from environment variables, optionally loaded from a .env
file. Call AppConfig.from_env() once at process start.

Environment Variables:
    - THINGS_URL: Base URL of the things service (required)
    - THINGS_TIMEOUT_SECONDS: Request timeout (default 30)
    - AMQP_URL: AMQP broker URL (required)
    - AMQP_CLIENT_EXCHANGE: Exchange for client messages (default "device")
    - AMQP_CONNECTOR_EXCHANGE: Exchange for connector messages (default "connector")
    - LOG_LEVEL: Logging level (default INFO)
"""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from .api.exceptions import ConfigurationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


@dataclass
class ThingsServiceConfig:
    """Connection settings for the things service."""

    url: str = field(default_factory=lambda: os.getenv("THINGS_URL", ""))
    timeout_seconds: float = field(
        default_factory=lambda: float(os.getenv("THINGS_TIMEOUT_SECONDS", "30"))
    )


@dataclass
class AMQPConfig:
    """Connection settings for the message broker."""

    url: str = field(default_factory=lambda: os.getenv("AMQP_URL", ""))
    client_exchange: str = field(
        default_factory=lambda: os.getenv("AMQP_CLIENT_EXCHANGE", "device")
    )
    connector_exchange: str = field(
        default_factory=lambda: os.getenv("AMQP_CONNECTOR_EXCHANGE", "connector")
    )


@dataclass
class AppConfig:
    """Complete service configuration."""

    things: ThingsServiceConfig = field(default_factory=ThingsServiceConfig)
    amqp: AMQPConfig = field(default_factory=AMQPConfig)
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "AppConfig":
        """Build the configuration from the environment.

        Args:
            dotenv: Load a .env file first (existing variables win)

        Raises:
            ConfigurationError: If a required variable is missing
        """
        if dotenv:
            load_dotenv()

        config = cls()
        config.validate()
        return config

    def validate(self) -> None:
        missing = []
        if not self.things.url:
            missing.append("THINGS_URL")
        if not self.amqp.url:
            missing.append("AMQP_URL")
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                missing_keys=missing,
            )


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the service."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )
