"""
Settings for the Wasender SDK.

Simple, reliable environment variable configuration for the WasenderAPI client
and the webhook receiver.
"""

import os
import tomllib
from pathlib import Path

from dotenv import load_dotenv

# Load .env file for local development - look in current working directory
load_dotenv(".env")

DEFAULT_BASE_URL = "https://www.wasenderapi.com/api"
DEFAULT_WEBHOOK_ROUTE = "/wasender/webhook"
DEFAULT_SIGNATURE_HEADER = "x-webhook-signature"


def _get_version_from_pyproject() -> str:
    """
    Read version from pyproject.toml file.

    Returns:
        Version string from pyproject.toml, or fallback version
    """
    current_path = Path(__file__)
    for parent in [current_path.parent, *current_path.parents]:
        pyproject_path = parent / "pyproject.toml"
        if pyproject_path.exists():
            try:
                with open(pyproject_path, "rb") as f:
                    pyproject_data = tomllib.load(f)
                    version = pyproject_data.get("project", {}).get("version")
                    if version:
                        return version
            except (OSError, tomllib.TOMLDecodeError):
                continue

    return "0.1.0"


class Settings:
    """SDK settings with environment-based configuration.

    Every value can be overridden with a keyword argument, which is how tests
    and multi-account applications build explicit configurations:

        Settings(api_key="key", webhook_secret="secret")
    """

    def __init__(self, **overrides):
        # ================================================================
        # Version
        # ================================================================
        self.version: str = _get_version_from_pyproject()

        # ================================================================
        # Environment & General Configuration
        # ================================================================
        self.port: int = int(os.getenv("PORT", "8000"))
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO")
        self.log_dir: str = os.getenv("LOG_DIR", "./logs")
        self.environment: str = os.getenv("ENVIRONMENT", "DEV")

        # ================================================================
        # WasenderAPI Configuration
        # ================================================================
        self.api_key: str = os.getenv("WASENDERAPI_API_KEY", "")
        self.personal_access_token: str = os.getenv(
            "WASENDERAPI_PERSONAL_ACCESS_TOKEN", ""
        )
        self.base_url: str = os.getenv("WASENDERAPI_BASE_URL", DEFAULT_BASE_URL)
        self.request_timeout: float = float(
            os.getenv("WASENDERAPI_REQUEST_TIMEOUT", "30")
        )

        # ================================================================
        # Webhook Configuration
        # ================================================================
        self.webhook_secret: str = os.getenv("WASENDERAPI_WEBHOOK_SECRET", "")
        self.webhook_route: str = os.getenv(
            "WASENDERAPI_WEBHOOK_ROUTE", DEFAULT_WEBHOOK_ROUTE
        )
        self.webhook_signature_header: str = os.getenv(
            "WASENDERAPI_WEBHOOK_SIGNATURE_HEADER", DEFAULT_SIGNATURE_HEADER
        )

        for key, value in overrides.items():
            if not hasattr(self, key):
                raise TypeError(f"Unknown setting: {key}")
            setattr(self, key, value)

        self._validate_settings()

    def _validate_settings(self):
        """Validate and normalize settings values."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR"]
        if self.log_level.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        self.log_level = self.log_level.upper()

        valid_environments = ["DEV", "PROD"]
        if self.environment.upper() not in valid_environments:
            self.environment = "DEV"  # Default fallback
        self.environment = self.environment.upper()

        self.base_url = self.base_url.rstrip("/")
        if not self.webhook_route.startswith("/"):
            self.webhook_route = f"/{self.webhook_route}"

    @property
    def has_personal_access_token(self) -> bool:
        """Check if session-management endpoints can be used."""
        return bool(self.personal_access_token)

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "DEV"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment == "PROD"


# Global settings instance
settings = Settings()
