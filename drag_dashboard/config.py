"""
Configuration management for drag_dashboard.

Uses pydantic-settings for type-safe configuration with automatic
environment variable loading and validation.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every path is optional; unset paths resolve under the project data
    directory (see the accessor functions below).
    """

    model_config = SettingsConfigDict(
        env_prefix="DRAG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra env vars
    )

    # Data locations
    data_dir: Path | None = Field(
        default=None,
        description="Base data directory (default: <project root>/data)",
    )
    results_dir: Path | None = Field(
        default=None,
        description="Directory holding D-RAG result JSON files",
    )
    questions_file: Path | None = Field(
        default=None,
        description="Questions metadata JSON file",
    )
    category_mapping_file: Path | None = Field(
        default=None,
        description="Category/classification display mapping JSON file",
    )
    exchange_rates_file: Path | None = Field(
        default=None,
        description="Historical exchange rate table JSON file",
    )

    # Result loading
    result_file_marker: str = Field(
        default="DRAG",
        description="Substring a result filename must contain to be loaded",
    )
    default_model: str = Field(
        default="D-RAG",
        description="model_used value for results that don't declare one",
    )

    @field_validator(
        "data_dir",
        "results_dir",
        "questions_file",
        "category_mapping_file",
        "exchange_rates_file",
        mode="before",
    )
    @classmethod
    def empty_string_to_none(cls, v: str | Path | None) -> str | Path | None:
        """Convert empty strings to None for optional paths."""
        if isinstance(v, str):
            v = v.strip()
            return v if v else None
        return v

    @field_validator("result_file_marker", "default_model", mode="before")
    @classmethod
    def strip_whitespace(cls, v: str) -> str:
        """Strip whitespace from string values."""
        if isinstance(v, str):
            return v.strip()
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Data paths - overridable from env, otherwise computed from package location


def get_data_dir() -> Path:
    """Get data directory path (project root / data)."""
    configured = get_settings().data_dir
    if configured is not None:
        return configured
    project_root = Path(__file__).parent.parent
    return project_root / "data"


def get_results_dir() -> Path:
    """Get directory containing the D-RAG result files."""
    return get_settings().results_dir or get_data_dir() / "results"


def get_questions_metadata_path() -> Path:
    """Get path to questions.json (canonical questions + company variants)."""
    return get_settings().questions_file or get_data_dir() / "questions.json"


def get_category_mapping_path() -> Path:
    """Get path to category_mapping.json."""
    return get_settings().category_mapping_file or get_data_dir() / "category_mapping.json"


def get_exchange_rates_path() -> Path:
    """Get path to exchange_rates.json."""
    return get_settings().exchange_rates_file or get_data_dir() / "exchange_rates.json"


def get_result_file_marker() -> str:
    """Get the filename marker identifying D-RAG result files."""
    return get_settings().result_file_marker


def get_default_model() -> str:
    """Get the model_used default for legacy result files."""
    return get_settings().default_model
