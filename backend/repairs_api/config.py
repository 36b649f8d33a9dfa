"""
Repairs API — Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory (main.py) and the test suite.

Environment variables with short names:
    PORT      → backend_port
    BASE_URL  → base_url (advertised in OpenAPI `servers` and the plugin manifest)
"""

from pathlib import Path
from typing import List, Optional

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

# Seed file shipped inside the package
DEFAULT_SEED_PATH = Path(__file__).resolve().parent / "data" / "repairs.json"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for running the demo locally.
    """

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(
        default=3000,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("port", "backend_port"),
    )

    # What: Public URL of the deployment, e.g. https://repairs.example.com
    # Empty means "relative to whatever host served the document".
    base_url: str = Field(default="")

    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs, or "*" for any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Data ──────────────────────────────────────────────────────────────
    seed_data_path: Path = Field(default=DEFAULT_SEED_PATH)
    seed_on_startup: bool = Field(default=True)

    # ── Static Assets & Plugin Manifest ───────────────────────────────────
    # Mounted at /static only when the directory exists
    static_dir: Path = Field(default=Path("public"))

    plugin_name: str = Field(default="Repairs")
    plugin_description: str = Field(
        default=(
            "Plugin for listing, creating, updating and deleting repairs. "
            "Repairs can be filtered by the person they are assigned to."
        )
    )
    contact_email: str = Field(default="support@example.com")
    logo_path: Optional[str] = Field(default="/static/logo.png")

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
