"""Configuration management using pydantic-settings."""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Vault
    vault_path: Path

    # Maximum results for note search and tag autocomplete
    search_limit: int = 15

    @field_validator("vault_path")
    @classmethod
    def validate_vault_path(cls, v: Path) -> Path:
        """Ensure vault path exists and is a directory."""
        v = v.expanduser()
        if not v.exists():
            raise ValueError(f"Vault path does not exist: {v}")
        if not v.is_dir():
            raise ValueError(f"Vault path is not a directory: {v}")
        return v.resolve()


def get_settings(**overrides) -> Settings:
    """Load settings from environment, with explicit overrides taking precedence."""
    overrides = {key: value for key, value in overrides.items() if value is not None}
    return Settings(**overrides)
