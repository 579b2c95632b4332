# searchguard/config.py
from __future__ import annotations

import os
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings

from searchguard.classifier import DEFAULT_MAX_LENGTH, ClassifierConfig
from searchguard.sanitizers.markup import get_sanitizer

APP_VERSION = os.getenv("APP_VERSION", "0.1.0")
GIT_SHA = os.getenv("GIT_SHA", "")
BUILD_TS = os.getenv("BUILD_TS", "")

# Equivalent of the helmet policy the service has always shipped with.
DEFAULT_CSP = "default-src 'self'; style-src 'self' 'unsafe-inline'; script-src 'self'"


class Settings(BaseSettings):
    # --- Identity / Build ---
    APP_NAME: str = Field(default="Secure Search Application")
    ENV: str = Field(default="dev")
    VERSION: str = Field(default=APP_VERSION)

    # --- Classifier ---
    SEARCH_MAX_LENGTH: int = Field(default=DEFAULT_MAX_LENGTH, ge=1, le=100000)
    # "none" skips the sanitizer divergence check
    SEARCH_SANITIZER: Literal["bleach", "none"] = Field(default="bleach")

    # --- Logging ---
    LOG_JSON: bool = Field(default=True)
    LOG_LEVEL: str = Field(default="INFO")

    # --- Security headers ---
    SEC_HEADERS_ENABLED: bool = Field(default=True)
    CSP_VALUE: str = Field(default=DEFAULT_CSP)
    SEC_HEADERS_REFERRER_POLICY: str = Field(default="no-referrer")
    SEC_HEADERS_PERMISSIONS_POLICY: Optional[str] = None

    # --- Metrics ---
    METRICS_ENABLED: bool = Field(default=True)
    METRICS_ROUTE_ENABLED: bool = Field(default=True)
    METRICS_API_KEY: Optional[str] = None

    model_config = {
        "extra": "ignore",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    def classifier_config(self) -> ClassifierConfig:
        return ClassifierConfig(
            sanitizer=get_sanitizer(self.SEARCH_SANITIZER),
            max_length=self.SEARCH_MAX_LENGTH,
        )


def get_settings() -> Settings:
    """Build settings from the current environment (no caching)."""
    return Settings()


__all__ = ["APP_VERSION", "BUILD_TS", "DEFAULT_CSP", "GIT_SHA", "Settings", "get_settings"]
