"""Server settings read from the environment.

    HEVY_API_KEY        single-user Hevy API key
    HEVY_BASE_URL       API root (default https://api.hevyapp.com)
    HEVY_TIMEOUT        request timeout in seconds (default 30)
    HEVY_MCP_USER       user id for callers without an access token
    HEVY_MCP_TRANSPORT  stdio, sse or streamable-http (default stdio)
    LOG_LEVEL           logging level (default INFO)
"""

import os
from typing import Literal, Mapping

import pydantic
from pydantic import BaseModel, Field

from hevy_mcp.hevy.client import DEFAULT_BASE_URL, DEFAULT_TIMEOUT
from hevy_mcp.hevy.exceptions import ConfigurationError

Transport = Literal["stdio", "sse", "streamable-http"]

ENV_VARS = {
    "api_key": "HEVY_API_KEY",
    "base_url": "HEVY_BASE_URL",
    "timeout": "HEVY_TIMEOUT",
    "default_user": "HEVY_MCP_USER",
    "transport": "HEVY_MCP_TRANSPORT",
    "log_level": "LOG_LEVEL",
}


class Settings(BaseModel):
    """Runtime settings for the Hevy MCP server."""
    api_key: str | None = Field(default=None, description="Hevy API key for single-user setups")
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Hevy API root URL")
    timeout: float = Field(default=DEFAULT_TIMEOUT, gt=0, description="Request timeout in seconds")
    default_user: str = Field(default="default", min_length=1, description="Fallback caller id")
    transport: Transport = Field(default="stdio", description="MCP transport")
    log_level: str = Field(default="INFO", description="Logging level")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        environ = os.environ if environ is None else environ
        values = {
            field: environ[var]
            for field, var in ENV_VARS.items()
            if environ.get(var)
        }
        try:
            return cls(**values)
        except pydantic.ValidationError as e:
            raise ConfigurationError(f"Invalid server settings: {e}") from e
