"""Configuration management for Campaign Access."""

from __future__ import annotations

import os
from datetime import timedelta
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# ============================================================================
# Login Guard Configuration
# ============================================================================
class LoginGuardConfig(BaseModel):
    """Brute-force login guard configuration."""

    max_attempts: int = Field(default=5, ge=1, description="Failures before lockout")
    lockout_minutes: int = Field(default=15, ge=1, description="Lockout duration")
    attempt_window_minutes: int = Field(
        default=60, ge=1, description="Window over which failures are counted"
    )
    sweep_interval_seconds: int = Field(
        default=300, ge=1, description="Minimum gap between stale-record sweeps"
    )

    @model_validator(mode="after")
    def _lockout_shorter_than_window(self) -> "LoginGuardConfig":
        # Failures must still be counted once a lockout expires inside the window
        if self.lockout_minutes >= self.attempt_window_minutes:
            raise ValueError(
                "lockout_minutes must be shorter than attempt_window_minutes"
            )
        return self

    @property
    def lockout_duration(self) -> timedelta:
        return timedelta(minutes=self.lockout_minutes)

    @property
    def attempt_window(self) -> timedelta:
        return timedelta(minutes=self.attempt_window_minutes)

    @property
    def sweep_interval(self) -> timedelta:
        return timedelta(seconds=self.sweep_interval_seconds)


# ============================================================================
# Masking Configuration
# ============================================================================
class MaskingConfig(BaseModel):
    """Column masking configuration."""

    denied_label: str = Field(
        default="권한 없음",
        description="Placeholder written into denied textual columns",
    )

    @field_validator("denied_label")
    @classmethod
    def _label_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("denied_label must not be blank")
        return value


# ============================================================================
# Logging Configuration
# ============================================================================
class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO")
    format: str = Field(default="json")
    file: str | None = Field(default=None)


# ============================================================================
# Main Settings
# ============================================================================
class Settings(BaseSettings):
    """Main settings for Campaign Access."""

    model_config = SettingsConfigDict(
        env_prefix="CAMPAIGN_ACCESS_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    login_guard: LoginGuardConfig = Field(default_factory=LoginGuardConfig)
    masking: MaskingConfig = Field(default_factory=MaskingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        with open(path, encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}

        # Expand environment variables
        config_dict = cls._expand_env_vars(config_dict)

        return cls(**config_dict)

    @classmethod
    def _expand_env_vars(cls, config: Any) -> Any:
        """Recursively expand environment variables in config."""
        if isinstance(config, dict):
            return {k: cls._expand_env_vars(v) for k, v in config.items()}
        elif isinstance(config, list):
            return [cls._expand_env_vars(item) for item in config]
        elif isinstance(config, str):
            # Handle ${VAR} and ${VAR:default} syntax
            if config.startswith("${") and "}" in config:
                var_part = config[2 : config.index("}")]
                if ":" in var_part:
                    var_name, default = var_part.split(":", 1)
                else:
                    var_name, default = var_part, None

                value = os.environ.get(var_name, default)
                return value if value is not None else config
            return config
        return config


@lru_cache
def get_settings(config_path: str | None = None) -> Settings:
    """Get cached settings instance."""
    if config_path:
        return Settings.from_yaml(config_path)

    # Try default locations
    default_paths = [
        Path("config/settings.yaml"),
        Path("settings.yaml"),
        Path.home() / ".campaign_access" / "settings.yaml",
    ]

    for path in default_paths:
        if path.exists():
            return Settings.from_yaml(path)

    # Return default settings if no config file found
    return Settings()
