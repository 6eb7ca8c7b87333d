"""
HTTP server configuration settings.

Dependencies: pydantic, pydantic_settings
System role: API server and CORS configuration
"""

from pydantic import Field

from docflow.configs.base import BaseSettings, settings_config


class ServerSettings(BaseSettings):
    """Uvicorn and CORS configuration."""

    model_config = settings_config("SERVER_")

    host: str = Field(default="0.0.0.0", description="Bind address")
    port: int = Field(default=3000, description="Bind port")
    cors_origins: list[str] = Field(
        default=["http://localhost:3001"],
        description="Origins allowed to call the API with credentials",
    )
