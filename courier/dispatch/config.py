"""
Dispatch configuration definition.

Loads configuration from environment variables and provides a Pydantic model.
Uses pydantic-settings for type safety and defaults.
"""

import sys
from typing import Optional

from pydantic import Field, field_validator

from courier.common.core.config import BaseAppConfig

from .models.environment import AppEnv


class DispatchConfig(BaseAppConfig):
    """
    Configuration for the dispatch layer.
    """

    APP_ENV: AppEnv = Field(
        default=AppEnv.DEVELOPMENT, description="Deployment environment (preview* = demo mode)"
    )
    APP_ORIGIN: Optional[str] = Field(
        default=None, description="Origin used to resolve relative routes"
    )
    REQUEST_TIMEOUT: float = Field(default=30.0, description="Transport timeout (seconds)")

    @field_validator("APP_ENV", mode="before")
    @classmethod
    def _normalize_app_env(cls, value):
        if isinstance(value, str):
            return value.strip().lower()
        return value


# Load config as a singleton.
# pydantic-settings reads environment variables during instantiation.
try:
    config = DispatchConfig()
except Exception as e:
    sys.stderr.write(f"Failed to load configuration: {e}\n")
    raise
