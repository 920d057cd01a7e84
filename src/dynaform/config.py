"""
Configuration module for dynaform.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


@dataclass
class FormConfig:
    """Configuration settings for dynaform."""

    # Descriptor API (consumed by HttpDescriptorStore)
    api_url: str = "http://localhost:9110"
    request_timeout: float = 10.0

    # Reference server settings
    server_host: str = "0.0.0.0"
    server_port: int = 9110

    # Descriptor cache
    stale_time_seconds: float = 300.0  # 5 minutes
    fetch_retries: int = 2
    retry_delay: float = 1.0  # seconds, doubled per attempt

    # Validation
    validate_hidden_contact: bool = True

    # Logging
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "FormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            api_url=os.getenv("DYNAFORM_API_URL", _defaults.api_url),
            request_timeout=float(os.getenv("DYNAFORM_REQUEST_TIMEOUT", str(_defaults.request_timeout))),
            server_host=os.getenv("DYNAFORM_SERVER_HOST", _defaults.server_host),
            server_port=int(os.getenv("DYNAFORM_SERVER_PORT", str(_defaults.server_port))),
            stale_time_seconds=float(os.getenv("DYNAFORM_STALE_TIME", str(_defaults.stale_time_seconds))),
            fetch_retries=int(os.getenv("DYNAFORM_FETCH_RETRIES", str(_defaults.fetch_retries))),
            retry_delay=float(os.getenv("DYNAFORM_RETRY_DELAY", str(_defaults.retry_delay))),
            validate_hidden_contact=os.getenv(
                "DYNAFORM_VALIDATE_HIDDEN_CONTACT", str(_defaults.validate_hidden_contact).lower()
            ).lower() == "true",
            log_level=os.getenv("DYNAFORM_LOG_LEVEL", _defaults.log_level).upper(),
        )


config = FormConfig.from_env()


def get_config() -> FormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> FormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
