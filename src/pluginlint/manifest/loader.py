"""
Manifest loading from plugin directories.

ManifestLoader locates plugin.json (required) and a sibling
marketplace.json (optional) under a plugin root and parses them as JSON.
Loader failures are fatal: they raise ManifestError subclasses.
"""

from __future__ import annotations

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import pluginlint.config.types as config_types
import pluginlint.errors as errors
import pluginlint.manifest.models as models

_logger = _logging.getLogger(__name__)


def read_json_object(path: _pathlib.Path, label: str | None = None) -> dict[str, _typing.Any]:
    """
    Read a JSON file whose top level must be an object.

    Args:
        path: File to read.
        label: Location label for error messages (defaults to the path).

    Returns:
        Parsed JSON object.

    Raises:
        MissingManifestError: If the file doesn't exist.
        UnreadableManifestError: If the file can't be read.
        MalformedManifestError: If the content isn't a UTF-8 JSON object.
    """
    label = label or str(path)

    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise errors.MissingManifestError(f"Manifest not found: {path}", label) from e
    except UnicodeDecodeError as e:
        raise errors.MalformedManifestError(f"Manifest is not valid UTF-8: {e}", label) from e
    except OSError as e:
        raise errors.UnreadableManifestError(f"Cannot read manifest: {e}", label) from e

    try:
        data = _json.loads(content)
    except _json.JSONDecodeError as e:
        raise errors.MalformedManifestError(
            f"Invalid JSON (line {e.lineno}, column {e.colno}): {e.msg}", label
        ) from e

    if not isinstance(data, dict):
        raise errors.MalformedManifestError(
            f"Top level must be a JSON object, got {type(data).__name__}", label
        )

    return data


class ManifestLoader:
    """
    Loads plugin and marketplace manifests from a plugin root.

    Manifests are looked up in each configured manifest directory in
    order (by default `.claude-plugin/`, then the root itself); the
    first match wins.
    """

    def __init__(self, config: config_types.DiscoveryConfig | None = None) -> None:
        """
        Initialize the loader.

        Args:
            config: Discovery settings (manifest names and directories).
        """
        self._config = config or config_types.DiscoveryConfig()

    def find_manifest(self, root: _pathlib.Path, filename: str) -> _pathlib.Path | None:
        """Return the first existing manifest file under root, if any."""
        for manifest_dir in self._config.manifest_dirs:
            candidate = root / manifest_dir / filename
            if candidate.is_file():
                return candidate
        return None

    def load(self, root: _pathlib.Path) -> models.LoadedPlugin:
        """
        Load a plugin's manifests.

        Args:
            root: Plugin root directory.

        Returns:
            LoadedPlugin with the parsed plugin.json and, when present,
            the sibling marketplace.json.

        Raises:
            MissingManifestError: If root isn't a directory or has no plugin.json.
            MalformedManifestError: If a manifest isn't a JSON object.
            UnreadableManifestError: If a manifest can't be read.
        """
        root = root.resolve()
        if not root.is_dir():
            raise errors.MissingManifestError(f"Plugin directory not found: {root}", str(root))

        plugin_path = self.find_manifest(root, self._config.plugin_manifest)
        if plugin_path is None:
            searched = ", ".join(
                (_pathlib.PurePosixPath(d) / self._config.plugin_manifest).as_posix()
                for d in self._config.manifest_dirs
            )
            raise errors.MissingManifestError(
                f"No {self._config.plugin_manifest} found (searched: {searched})",
                str(root),
            )

        plugin_file = self._read(plugin_path, root)
        _logger.debug("Loaded plugin manifest %s", plugin_path)

        marketplace_file = None
        marketplace_path = self.find_manifest(root, self._config.marketplace_manifest)
        if marketplace_path is not None:
            marketplace_file = self._read(marketplace_path, root)
            _logger.debug("Loaded marketplace manifest %s", marketplace_path)

        return models.LoadedPlugin(
            root=root,
            plugin=plugin_file,
            marketplace=marketplace_file,
        )

    def load_marketplace(self, path: _pathlib.Path) -> models.ManifestFile:
        """
        Load a marketplace manifest on its own.

        Args:
            path: A marketplace.json file, or a directory to search.

        Returns:
            The parsed marketplace file. Its root is the repository the
            marketplace describes (the parent of a manifest directory
            such as `.claude-plugin/`).

        Raises:
            MissingManifestError: If no marketplace.json is found.
            MalformedManifestError: If it isn't a JSON object.
        """
        path = path.resolve()
        if path.is_dir():
            found = self.find_manifest(path, self._config.marketplace_manifest)
            if found is None:
                raise errors.MissingManifestError(
                    f"No {self._config.marketplace_manifest} found in {path}", str(path)
                )
            return self._read(found, path)

        return self._read(path, self.repository_root(path))

    def repository_root(self, manifest_path: _pathlib.Path) -> _pathlib.Path:
        """Directory that a manifest's relative paths resolve against."""
        parent = manifest_path.parent
        nested_dirs = {d.strip("/") for d in self._config.manifest_dirs if d not in (".", "./")}
        if parent.name in nested_dirs:
            return parent.parent
        return parent

    def _read(self, path: _pathlib.Path, root: _pathlib.Path) -> models.ManifestFile:
        """Read one manifest file relative to root."""
        manifest = models.ManifestFile(path=path, data={}, root=root)
        manifest.data = read_json_object(path, manifest.label)
        return manifest
