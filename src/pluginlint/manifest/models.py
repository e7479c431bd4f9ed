"""
Typed manifest models.

These models describe plugin.json and marketplace.json once the schema
validator has accepted them. Raw manifests are plain dicts until then,
so that every rule can report independently instead of stopping at the
first pydantic error.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic

import pluginlint.constants as constants


class PluginManifest(_pydantic.BaseModel):
    """
    Plugin manifest parsed from plugin.json.

    Required fields:
    - name: Unique plugin identifier (kebab-case)

    Component fields declare paths; skills are never declared here.
    Any other keys (version, description, author, ...) are preserved.
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    name: str = _pydantic.Field(
        ...,
        min_length=1,
        description="Plugin name (kebab-case)",
    )

    commands: str | list[str] | None = _pydantic.Field(
        default=None,
        description="Command directory override, or explicit command files",
    )

    agents: list[str] = _pydantic.Field(
        default_factory=list,
        description="Agent definition files (*.md), never auto-discovered",
    )

    hooks: str | dict[str, _typing.Any] | None = _pydantic.Field(
        default=None,
        description="Path to a hooks manifest, or an inline hooks object",
    )

    @property
    def metadata(self) -> dict[str, _typing.Any]:
        """Manifest keys outside the component fields."""
        return dict(self.model_extra) if self.model_extra else {}

    def commands_is_directory(self) -> bool:
        """Whether `commands` overrides the scanned directory."""
        return isinstance(self.commands, str)

    def commands_is_explicit(self) -> bool:
        """Whether `commands` lists exact files instead of scanning."""
        return isinstance(self.commands, list)


class MarketplaceOwner(_pydantic.BaseModel):
    """Owner record of a marketplace."""

    model_config = _pydantic.ConfigDict(extra="allow")

    name: str
    email: str


class MarketplacePluginEntry(_pydantic.BaseModel):
    """One plugin listed in a marketplace."""

    model_config = _pydantic.ConfigDict(extra="allow")

    name: str = _pydantic.Field(..., min_length=1)

    source: str | dict[str, _typing.Any]
    """Local path (starting with ./) or a remote source object."""

    @property
    def is_local(self) -> bool:
        """Whether the source is a path inside the marketplace repository."""
        return isinstance(self.source, str)

    @property
    def is_colocated(self) -> bool:
        """Whether the plugin lives at the marketplace repository root."""
        return self.source == constants.PATH_PREFIX


class MarketplaceManifest(_pydantic.BaseModel):
    """Marketplace manifest parsed from marketplace.json."""

    model_config = _pydantic.ConfigDict(extra="allow")

    name: str = _pydantic.Field(..., min_length=1)

    owner: MarketplaceOwner

    plugins: list[MarketplacePluginEntry] = _pydantic.Field(default_factory=list)

    def get_plugin(self, name: str) -> MarketplacePluginEntry | None:
        """Look up a plugin entry by name."""
        for entry in self.plugins:
            if entry.name == name:
                return entry
        return None


@_dataclasses.dataclass
class ManifestFile:
    """A manifest file read from disk, not yet validated."""

    path: _pathlib.Path
    """Absolute path to the manifest file."""

    data: dict[str, _typing.Any]
    """Parsed JSON object."""

    root: _pathlib.Path
    """Directory that relative paths in this manifest resolve against."""

    @property
    def label(self) -> str:
        """Location label used in violations (path relative to root)."""
        try:
            return self.path.relative_to(self.root).as_posix()
        except ValueError:
            return str(self.path)


@_dataclasses.dataclass
class LoadedPlugin:
    """
    A plugin root with its manifests loaded.

    This is the loader's output: raw data plus filesystem locations.
    """

    root: _pathlib.Path
    """Absolute plugin root directory."""

    plugin: ManifestFile
    """The plugin.json file."""

    marketplace: ManifestFile | None = None
    """A sibling marketplace.json, when one exists."""
