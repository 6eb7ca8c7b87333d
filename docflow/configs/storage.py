"""
Upload storage configuration settings.

Controls where uploaded files land on disk and which files are accepted.

Dependencies: pydantic, pydantic_settings
System role: File storage configuration
"""

from pydantic import Field

from docflow.configs.base import BaseSettings, settings_config


class StorageSettings(BaseSettings):
    """Local upload storage configuration."""

    model_config = settings_config("UPLOAD_")

    directory: str = Field(
        default="./uploads",
        description="Directory where uploaded files are stored",
    )
    max_file_size: int = Field(
        default=25 * 1024 * 1024,
        description="Maximum accepted upload size in bytes",
    )
    allowed_extensions: set[str] = Field(
        default={".pdf", ".html"},
        description="Accepted file extensions (lowercase, with dot)",
    )
