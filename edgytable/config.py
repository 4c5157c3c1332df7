# Copyright Krafter SAS <developer@krafter.io>
# MIT License (see LICENSE file).

from typing import Annotated

from fastapi import Depends
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from edgytable.logger import LogLevel, setup_logging


class TableSettings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_prefix="EDGYTABLE_",
        env_file=".env",
        extra="ignore",
    )

    # Pagination
    per_page: int = 15
    max_per_page: int = 1000
    page_name: str = "page"

    # Search
    native_ilike_drivers: list[str] = ["postgresql", "postgres", "pgsql"]

    # Logging
    log_level: LogLevel = LogLevel.INFO

    @field_validator("per_page", "max_per_page")
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("Pagination sizes must be positive")
        return v

    @field_validator("native_ilike_drivers")
    def normalize_drivers(cls, v):
        return [driver.lower() for driver in v]


_settings: TableSettings | None = None


def init_settings(settings: TableSettings | None = None, **overrides) -> TableSettings:
    """
    Register the process-wide settings instance.

    Passing an instance replaces the current one, otherwise settings are
    loaded from the environment (and ``.env``) with the given overrides.
    """
    global _settings

    _settings = settings if settings is not None else TableSettings(**overrides)
    setup_logging(_settings)

    return _settings


def get_settings() -> TableSettings:
    if _settings is None:
        return init_settings()

    return _settings


def reset_settings() -> None:
    global _settings

    _settings = None


Settings = Annotated[TableSettings, Depends(get_settings)]


__all__ = [
    "TableSettings",
    "init_settings",
    "get_settings",
    "reset_settings",
    "Settings",
]
