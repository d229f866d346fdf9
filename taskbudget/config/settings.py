"""
Configuration Management for the Task & Budget Planner

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, undo retention and entity defaults are all read from
the environment (or a .env file) and validated at startup.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Persistent store configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TASKBUDGET_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["file", "memory"] = Field(
        default="file",
        description="Where the data blob lives: JSON files on disk or process memory"
    )
    data_dir: str = Field(
        default=".taskbudget",
        description="Directory holding one JSON file per storage key"
    )
    data_key: str = Field(
        default="budget-task-app-data",
        description="Key of the tasks/expenses/income/goals blob"
    )
    view_key: str = Field(
        default="active-view",
        description="Key of the last selected view name"
    )

    @field_validator('data_key', 'view_key')
    @classmethod
    def validate_key(cls, v: str) -> str:
        """Keys become file names, so path separators are not allowed."""
        v = v.strip()
        if not v or "/" in v or "\\" in v:
            raise ValueError(f"Invalid storage key: {v!r}")
        return v


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="TASKBUDGET_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Logging
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: Literal["debug", "info", "warning", "error"] = Field(
        default="info",
        description="Minimum level written to the log"
    )

    # Undo retention
    undo_capacity: int = Field(
        default=20,
        ge=1,
        le=500,
        description="Deleted entities kept per entity kind for undo"
    )

    # Defaults for omitted draft fields
    default_task_category: str = Field(
        default="Personal",
        min_length=1,
        description="Category given to tasks created without one"
    )
    default_expense_category: str = Field(
        default="Food",
        min_length=1,
        description="Category given to expenses created without one"
    )
    default_income_source: str = Field(
        default="Salary",
        min_length=1,
        description="Source given to income created without one"
    )

    @property
    def effective_log_level(self) -> str:
        """Debug mode always logs at debug level."""
        return "debug" if self.debug_mode else self.log_level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Uses LRU cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus
    {setting_name}_error entries for the ones that failed.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
