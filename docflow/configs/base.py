"""
Shared settings foundation.

Every config module reads the process environment first and then an optional
.env file. Sections differ only in their variable prefix.

Dependencies: pydantic_settings
System role: Foundation for all configuration classes
"""

from typing import Any

from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

ENV_FILE = ".env"


def settings_config(env_prefix: str = "", **overrides: Any) -> SettingsConfigDict:
    """Build the model_config of a settings section reading '<env_prefix><FIELD>'."""
    return SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding="utf-8",
        env_prefix=env_prefix,
        case_sensitive=False,
        extra="ignore",
        **overrides,
    )


class BaseSettings(PydanticBaseSettings):
    """Unprefixed settings section."""

    model_config = settings_config()
