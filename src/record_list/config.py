"""
Configuration module for the record_list library.

This module defines all configuration classes using Pydantic BaseModel and BaseSettings.
Configuration is loaded from environment variables with nested delimiter "__".

Example .env:
    APP__LOG_LEVEL=DEBUG
    PAGINATION__COUNT_BY=uuid
    SORT__NULLS_LAST=false

Usage:
    from record_list.config import get_settings
    settings = get_settings()
    print(settings.pagination.page_keys)
"""

from functools import lru_cache
from typing import List

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from record_list.config_constants import (
    DEFAULT_COUNT_BY,
    DEFAULT_ORDER_KEYS,
    DEFAULT_PAGE_KEYS,
    DEFAULT_PER_PAGE_KEYS,
    DEFAULT_SORT_KEYS,
    LogLevel,
)


# =============================================================================
# PAGINATION CONFIGURATION
# =============================================================================

class PaginationConfig(BaseModel):
    """
    Defaults used by the paginate step when its declaration omits them.

    There is intentionally no per_page default here: a list definition must
    declare its own page size (or receive one in the parameters).
    """

    # Path into the parameters holding the requested page number
    # e.g. ["page"] reads params["page"], ["paging", "page"] reads params["paging"]["page"]
    page_keys: List[str] = Field(default_factory=lambda: list(DEFAULT_PAGE_KEYS))

    # Path into the parameters holding the requested page size
    per_page_keys: List[str] = Field(default_factory=lambda: list(DEFAULT_PER_PAGE_KEYS))

    # Field passed to the repository when counting matching records
    count_by: str = DEFAULT_COUNT_BY


# =============================================================================
# SORT CONFIGURATION
# =============================================================================

class SortConfig(BaseModel):
    """Defaults used by the sort step when its declaration omits them."""

    # Path into the parameters holding the sort field
    sort_keys: List[str] = Field(default_factory=lambda: list(DEFAULT_SORT_KEYS))

    # Path into the parameters holding the sort order ("asc" / "desc")
    order_keys: List[str] = Field(default_factory=lambda: list(DEFAULT_ORDER_KEYS))

    # Turn "asc"/"desc" into "asc_nulls_last"/"desc_nulls_last"
    nulls_last: bool = True


# =============================================================================
# APPLICATION CONFIGURATION
# =============================================================================

class AppConfig(BaseModel):
    """
    General application settings.

    Controls logging verbosity.
    """

    # Logging level: DEBUG, INFO, WARNING, ERROR
    # DEBUG: logs every step invocation with its trace id
    # INFO: pipeline construction and retrieval summaries
    log_level: LogLevel = LogLevel.INFO


# =============================================================================
# ROOT SETTINGS (Environment Loading)
# =============================================================================

class Settings(BaseSettings):
    """
    Root settings class that loads all configuration from environment.

    Environment variables use "__" (double underscore) as nested delimiter.
    Example: PAGINATION__COUNT_BY sets settings.pagination.count_by

    Every value has a default, so no environment variables are required.
    """

    # Paginate step defaults
    pagination: PaginationConfig = PaginationConfig()

    # Sort step defaults
    sort: SortConfig = SortConfig()

    # Application-wide settings
    app: AppConfig = AppConfig()

    model_config = SettingsConfigDict(
        env_file=".env",            # Load from .env file in project root
        env_file_encoding="utf-8",  # UTF-8 encoding for .env file
        case_sensitive=False,       # ENV_VAR and env_var are equivalent
        env_nested_delimiter="__",  # Use __ for nested config (SORT__NULLS_LAST)
        extra="ignore",             # Tolerate unrelated keys in a shared .env
    )


# =============================================================================
# SINGLETON ACCESSOR
# =============================================================================

@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance (singleton pattern).

    Settings are loaded once and cached for the lifetime of the process.

    Returns:
        Settings instance with all configuration loaded from environment
    """
    return Settings()
