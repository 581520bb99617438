"""
Settings for the account layer and console, loaded with pydantic-settings.

Load order: environment variables prefixed with ``CREDVAULT_``, then a
``.env`` file in the working directory, then the defaults below.

Usage
-----
from accounts.config import get_settings

settings = get_settings()
settings.USERS_FILE
"""
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CREDVAULT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    USERS_FILE: str = Field("users.json", description="Path of the JSON user store used by the console.")
    LOG_LEVEL: str = Field("INFO", description="Root logging level (DEBUG, INFO, WARNING, ...).")
    PASSWORD_SCHEME: Literal["sha256", "argon2"] = Field(
        "sha256", description="Credential hasher for new passwords."
    )
    USERNAME_MIN_LENGTH: int = Field(3, ge=1)
    USERNAME_MAX_LENGTH: int = Field(50, ge=1)
    CHECK_EMAIL_DELIVERABILITY: bool = Field(
        False, description="Resolve the email domain in DNS during validation."
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return str(v).strip().upper()


@lru_cache
def get_settings() -> Settings:
    return Settings()
