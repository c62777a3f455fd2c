"""Configuration management for async-git-reader using pydantic-settings.

Supports hierarchical configuration from:
1. Environment variables (highest priority)
2. JSON config file
3. Default values (lowest priority)

Environment variables use the format: ASYNC_GIT_READER_<SECTION>__<FIELD>
Example: ASYNC_GIT_READER_REPOSITORY__HASH_ALGORITHM=sha256
"""

import json
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from .paths import APP_NAME, get_config_file_path


class JsonConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source for loading from JSON file."""

    def __init__(self, settings_cls: type[BaseSettings], json_file: Path):
        super().__init__(settings_cls)
        self.json_file = json_file

    def get_field_value(
        self, field: Any, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get field value - required by base class but not used in v2."""
        return None, "", False

    def __call__(self) -> dict[str, Any]:
        """Load configuration from JSON file."""
        if self.json_file.exists():
            with open(self.json_file, encoding="utf-8") as f:
                return _strip_comment_fields(json.load(f))
        return {}


class RepositoryConfig(BaseModel):
    """Repository layout and hashing configuration section."""

    git_dir: str = ".git"
    head_file: str = "HEAD"
    hash_algorithm: Literal["sha1", "sha256"] = "sha1"
    read_chunk_size: int = Field(default=65_536, ge=1)
    max_ref_depth: int = Field(default=5, ge=0)

    @field_validator('git_dir', 'head_file')
    @classmethod
    def must_not_be_empty(cls, v: str) -> str:
        """Validate that layout names are not empty or whitespace-only."""
        if not v or not v.strip():
            raise ValueError('must be a non-empty string')
        return v


class LoggingConfig(BaseModel):
    """Logging configuration section."""

    level: str = "INFO"
    console: bool = True
    file: bool = False
    log_dir: str | None = None  # None = platform logs directory
    serialize_file: bool = True


# Module-level variables
_json_config_file: Path | None = None  # For settings_customise_sources
_settings_cache: "Settings | None" = None  # For singleton pattern


def _strip_comment_fields(data: Any) -> Any:
    """Recursively strip keys starting with _ or $ from dict.

    Args:
        data: Dictionary to clean (or any other type, which is returned as-is)

    Returns:
        Dictionary with comment fields removed, or original value if not a dict
    """
    if not isinstance(data, dict):
        return data
    return {
        k: _strip_comment_fields(v) if isinstance(v, dict) else v
        for k, v in data.items()
        if not k.startswith('_') and not k.startswith('$')
    }


class Settings(BaseSettings):
    """Root configuration model with nested sections.

    Loads configuration from (in priority order):
    1. Environment variables with ASYNC_GIT_READER_ prefix
    2. JSON config file (if provided)
    3. Default values
    """

    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = SettingsConfigDict(
        env_prefix="ASYNC_GIT_READER_",
        env_nested_delimiter="__",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to add JSON config file support.

        Priority order (highest to lowest):
        1. Environment variables
        2. JSON config file (if _json_config_file module variable is set)
        3. Default values
        """
        global _json_config_file
        if _json_config_file is not None:
            json_source = JsonConfigSettingsSource(settings_cls, json_file=_json_config_file)
            return (env_settings, json_source, init_settings)
        return (env_settings, init_settings)


def get_settings(config_path: Path | str | None = None, *, _force_reload: bool = False) -> Settings:
    """Load settings from optional JSON config file and environment variables.

    Implements singleton pattern - returns cached settings unless _force_reload=True
    or config_path is provided. Without config_path the platform config file
    (get_config_file_path()) is read when it exists.

    Args:
        config_path: Optional path to JSON config file. If provided, bypasses cache.
        _force_reload: If True, bypasses cache and creates fresh Settings instance

    Returns:
        Settings instance with merged configuration
    """
    global _json_config_file, _settings_cache

    if _settings_cache is not None and not _force_reload and config_path is None:
        return _settings_cache

    _json_config_file = Path(config_path) if config_path else get_config_file_path()
    try:
        settings = Settings()
    finally:
        _json_config_file = None  # Reset after use

    if config_path is None:
        _settings_cache = settings

    return settings


__all__ = [
    "APP_NAME",
    "LoggingConfig",
    "RepositoryConfig",
    "Settings",
    "get_settings",
]
