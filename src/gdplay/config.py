"""Configuration settings for gdplay.

Precedence: command-line flags > GDPLAY_* environment variables (or .env) >
defaults below.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def default_cache_root() -> Path:
    return Path.home() / ".swiftgodotbuilder" / "playgrounds"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GDPLAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Where workspaces live
    cache_dir: Path = Field(default_factory=default_cache_root)

    # Local SwiftGodotBuilder checkout used when it holds a Package.swift
    builder_path: str | None = None

    # Tool commands
    swift: str = "swift"
    godot: str | None = None


_settings: Settings | None = None


def get_settings() -> Settings:
    """Get cached settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings cache (useful for testing)."""
    global _settings
    _settings = None
