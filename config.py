"""Application configuration."""
import os
from dataclasses import dataclass
from typing import Union

from helpdesk_client.api.credentials import Credentials
from helpdesk_client.api.errors import ConfigurationError


@dataclass
class HelpdeskApiConfig:
    """Helpdesk API settings."""

    site: str = ""
    email: str = ""
    password: str = ""  # Read from the environment or user input
    api_token: str = ""
    oauth_token: str = ""
    timeout: Union[int, str] = 60  # Raw env value, checked by request_timeout()

    @classmethod
    def from_env(cls) -> "HelpdeskApiConfig":
        """Load config from environment variables."""
        return cls(
            site=os.getenv("HELPDESK_SITE", ""),
            email=os.getenv("HELPDESK_EMAIL", ""),
            password=os.getenv("HELPDESK_PASSWORD", ""),
            api_token=os.getenv("HELPDESK_API_TOKEN", ""),
            oauth_token=os.getenv("HELPDESK_OAUTH_TOKEN", ""),
            timeout=os.getenv("HELPDESK_TIMEOUT", "60"),
        )

    def request_timeout(self) -> float:
        """Timeout in seconds. Raises ConfigurationError for a non-positive or non-numeric value."""
        try:
            value = float(self.timeout)
        except (TypeError, ValueError):
            raise ConfigurationError(f"Timeout must be a number of seconds, got {self.timeout!r}") from None
        if value <= 0:
            raise ConfigurationError(f"Timeout must be positive, got {self.timeout!r}")
        return value

    def to_credentials(self) -> Credentials:
        return Credentials(
            site=self.site,
            email=self.email,
            password=self.password or None,
            api_token=self.api_token or None,
            oauth_token=self.oauth_token or None,
        )


@dataclass
class AppConfig:
    """Application settings."""

    log_level: str = "WARNING"
    api: HelpdeskApiConfig = None

    def __post_init__(self):
        """Fill in defaults."""
        if self.api is None:
            self.api = HelpdeskApiConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            log_level=os.getenv("HELPDESK_LOG_LEVEL", "WARNING").upper(),
            api=HelpdeskApiConfig.from_env(),
        )


# Global instance
app_config = AppConfig.from_env()
