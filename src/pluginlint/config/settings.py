"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with PLUGINLINT_ prefix
3. .env file (only when PLUGINLINT_ENV_FILE points at one)
4. Layered YAML config files:
   - Project config: ./.pluginlint.yaml (highest)
   - User config: ~/.config/pluginlint/config.yaml

Nested config uses double underscore delimiter:
  PLUGINLINT_RULES__MAX_NAME_LENGTH=32
  PLUGINLINT_DISCOVERY__RECURSIVE_COMMANDS=true
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import pluginlint.config.types as types

PROJECT_CONFIG_NAME = ".pluginlint.yaml"


def _get_env_file() -> str | None:
    """Determine which .env file to load.

    Only an explicit PLUGINLINT_ENV_FILE is honored; a stray .env in the
    directory being linted is never picked up.
    """
    if env_file := _os.environ.get("PLUGINLINT_ENV_FILE"):
        if _pathlib.Path(env_file).exists():
            return env_file
    return None


def get_user_config_path() -> _pathlib.Path:
    """Get the path to the user config file."""
    return _pathlib.Path.home() / ".config" / "pluginlint" / "config.yaml"


def get_project_config_path(start: _pathlib.Path | None = None) -> _pathlib.Path:
    """Get the path to the project config file."""
    return (start or _pathlib.Path.cwd()) / PROJECT_CONFIG_NAME


def get_config_files() -> list[_pathlib.Path]:
    """
    Get YAML config files in precedence order (lowest to highest).

    Missing files are skipped by the YAML source.
    """
    return [get_user_config_path(), get_project_config_path()]


class Settings(_pydantic_settings.BaseSettings):
    """
    pluginlint configuration settings.

    All settings can be overridden via environment variables with PLUGINLINT_
    prefix. For nested config, use double underscore:
    PLUGINLINT_RULES__CHECK_PERMISSIONS=false
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="PLUGINLINT_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args), highest
        2. env_settings (PLUGINLINT_* env vars)
        3. dotenv_settings (.env file)
        4. yaml_settings (user then project config.yaml, merged key by key)
        5. (defaults via Field definitions), lowest
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            _pydantic_settings.YamlConfigSettingsSource(
                settings_cls,
                yaml_file=get_config_files(),
                deep_merge=True,
            ),
            file_secret_settings,
        )

    # =========================================================================
    # Nested config sections
    # =========================================================================

    discovery: types.DiscoveryConfig = _pydantic.Field(
        default_factory=types.DiscoveryConfig
    )
    """Manifest location and component discovery settings."""

    rules: types.RulesConfig = _pydantic.Field(default_factory=types.RulesConfig)
    """Validation rule settings."""

    output: types.OutputConfig = _pydantic.Field(default_factory=types.OutputConfig)
    """Report output settings."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Logging settings."""

    def get_unknown_keys(self) -> dict[str, _typing.Any]:
        """Collect config keys that no section recognizes (likely typos)."""
        result: dict[str, _typing.Any] = dict(self.model_extra or {})
        for field_name in ("discovery", "rules", "output", "logging"):
            section: types.ConfigBase = getattr(self, field_name)
            result.update(section.collect_all_extra_fields(field_name))
        return result
