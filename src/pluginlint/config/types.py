"""Configuration type definitions for pluginlint settings.

This module defines the Pydantic models used to represent configuration
sections nested within the main Settings class:
- DiscoveryConfig: where manifests live, how components are found
- RulesConfig: tunables for the schema and file checks
- OutputConfig: report format
- LoggingConfig: log level

Design decision: All types use `extra="allow"` to preserve unknown fields.
Use `get_extra_fields()` to audit a config for typos and unknown keys.
"""

import typing as _typing

import pydantic as _pydantic

import pluginlint.constants as constants

# =============================================================================
# Base class with introspection
# =============================================================================


class ConfigBase(_pydantic.BaseModel):
    """
    Base class for all config types.

    All config types use `extra="allow"` so unknown fields are preserved
    rather than silently dropped.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """
        Return fields that were provided but not in the schema.

        Returns:
            Dict of field_name → value for all unrecognized fields.
        """
        return dict(self.model_extra) if self.model_extra else {}

    def collect_all_extra_fields(
        self,
        prefix: str = "",
    ) -> dict[str, _typing.Any]:
        """
        Recursively collect extra fields from this config and nested configs.

        Returns a flat dict with dotted paths as keys, e.g.:
            {"discovery.recursve_commands": True}
        """
        result: dict[str, _typing.Any] = {}

        for key, value in self.get_extra_fields().items():
            path = f"{prefix}.{key}" if prefix else key
            result[path] = value

        for field_name in self.__class__.model_fields:
            value = getattr(self, field_name, None)
            if isinstance(value, ConfigBase):
                child_prefix = f"{prefix}.{field_name}" if prefix else field_name
                result.update(value.collect_all_extra_fields(child_prefix))

        return result


# =============================================================================
# Discovery Settings
# =============================================================================


class DiscoveryConfig(ConfigBase):
    """
    Manifest location and component discovery settings.

    YAML section: discovery.*
    """

    manifest_dirs: list[str] = _pydantic.Field(
        default_factory=lambda: list(constants.DEFAULT_MANIFEST_DIRS),
        min_length=1,
    )
    """Directories searched for plugin.json / marketplace.json, in order."""

    plugin_manifest: str = constants.PLUGIN_MANIFEST_NAME
    """Plugin manifest file name."""

    marketplace_manifest: str = constants.MARKETPLACE_MANIFEST_NAME
    """Marketplace manifest file name."""

    recursive_commands: bool = False
    """Scan command directories recursively instead of top-level only."""

    plugin_root_token: str = _pydantic.Field(
        default=constants.PLUGIN_ROOT_TOKEN,
        min_length=1,
    )
    """Placeholder expanded to the plugin root in hook commands."""


# =============================================================================
# Rule Settings
# =============================================================================


class RulesConfig(ConfigBase):
    """
    Validation rule settings.

    YAML section: rules.*
    """

    max_name_length: int = _pydantic.Field(default=constants.MAX_NAME_LENGTH, ge=1)
    """Maximum plugin name length."""

    check_permissions: bool = True
    """Report .md files that are not world-readable."""


# =============================================================================
# Output Settings
# =============================================================================


class OutputConfig(ConfigBase):
    """
    Report output settings.

    YAML section: output.*
    """

    format: _typing.Literal["text", "json"] = "text"
    """Default report format for the CLI."""


# =============================================================================
# Logging Settings
# =============================================================================


class LoggingConfig(ConfigBase):
    """
    Logging settings.

    YAML section: logging.*
    """

    level: _typing.Literal["debug", "info", "warning", "error"] = "warning"
    """Log level for the pluginlint logger."""
