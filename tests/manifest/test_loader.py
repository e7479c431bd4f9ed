"""
Tests for manifest loading.

Tests verify that:
- plugin.json is found in .claude-plugin/ first, then the plugin root
- Missing manifests raise MissingManifestError
- Invalid JSON and non-object manifests raise MalformedManifestError
- A sibling marketplace.json is loaded alongside plugin.json
"""

import os as _os
import pathlib as _pathlib

import pytest as _pytest

import pluginlint.config.types as types
import pluginlint.errors as errors
import pluginlint.manifest.loader as loader


class TestManifestLoader:
    """Tests for ManifestLoader.load method."""

    def test_loads_manifest_from_claude_plugin_dir(self, make_plugin) -> None:
        """plugin.json under .claude-plugin/ is loaded with its raw data."""
        root = make_plugin({"name": "my-plugin", "version": "1.0.0"})

        loaded = loader.ManifestLoader().load(root)

        assert loaded.root == root.resolve()
        assert loaded.plugin.data == {"name": "my-plugin", "version": "1.0.0"}
        assert loaded.plugin.label == ".claude-plugin/plugin.json"
        assert loaded.marketplace is None

    def test_loads_manifest_from_plugin_root(self, make_plugin) -> None:
        """plugin.json directly in the root is accepted."""
        root = make_plugin({"name": "my-plugin"}, manifest_dir=".")

        loaded = loader.ManifestLoader().load(root)

        assert loaded.plugin.data["name"] == "my-plugin"
        assert loaded.plugin.label == "plugin.json"

    def test_claude_plugin_dir_takes_precedence(self, make_plugin, write_file) -> None:
        """When both locations exist, .claude-plugin/plugin.json wins."""
        root = make_plugin({"name": "nested"})
        write_file(root / "plugin.json", '{"name": "top-level"}')

        loaded = loader.ManifestLoader().load(root)

        assert loaded.plugin.data["name"] == "nested"

    def test_custom_manifest_dirs(self, make_plugin) -> None:
        """Configured manifest directories replace the defaults."""
        root = make_plugin({"name": "my-plugin"}, manifest_dir="meta")
        config = types.DiscoveryConfig(manifest_dirs=["meta"])

        loaded = loader.ManifestLoader(config).load(root)

        assert loaded.plugin.label == "meta/plugin.json"

    def test_missing_directory_raises_missing_manifest(self, tmp_path: _pathlib.Path) -> None:
        """A plugin root that doesn't exist is a MissingManifest failure."""
        with _pytest.raises(errors.MissingManifestError, match="not found"):
            loader.ManifestLoader().load(tmp_path / "nonexistent")

    def test_missing_manifest_raises_missing_manifest(self, make_plugin) -> None:
        """A directory with no plugin.json lists where it looked."""
        root = make_plugin(files={"commands/build.md": "# Build"})

        with _pytest.raises(errors.MissingManifestError, match="No plugin.json found") as exc:
            loader.ManifestLoader().load(root)

        assert ".claude-plugin/plugin.json" in str(exc.value)

    def test_invalid_json_raises_malformed_manifest(self, make_plugin) -> None:
        """Syntax errors report the line and column."""
        root = make_plugin('{"name": "my-plugin",\n  "agents": [}')

        with _pytest.raises(errors.MalformedManifestError, match="line 2") as exc:
            loader.ManifestLoader().load(root)

        assert exc.value.location == ".claude-plugin/plugin.json"

    def test_non_object_manifest_raises_malformed_manifest(self, make_plugin) -> None:
        """A top-level JSON array is not a manifest."""
        root = make_plugin('["my-plugin"]')

        with _pytest.raises(errors.MalformedManifestError, match="got list"):
            loader.ManifestLoader().load(root)

    def test_non_utf8_manifest_raises_malformed_manifest(self, make_plugin) -> None:
        """Undecodable bytes are a malformed manifest, not a crash."""
        root = make_plugin({"name": "my-plugin"})
        (root / ".claude-plugin" / "plugin.json").write_bytes(b'{"name": "\xff\xfe"}')

        with _pytest.raises(errors.MalformedManifestError, match="UTF-8"):
            loader.ManifestLoader().load(root)

    @_pytest.mark.skipif(
        hasattr(_os, "geteuid") and _os.geteuid() == 0,
        reason="root can read files regardless of mode",
    )
    def test_unreadable_manifest_raises_unreadable(self, make_plugin) -> None:
        """A manifest without read permission is reported as unreadable."""
        root = make_plugin({"name": "my-plugin"})
        (root / ".claude-plugin" / "plugin.json").chmod(0o000)

        with _pytest.raises(errors.UnreadableManifestError):
            loader.ManifestLoader().load(root)

    def test_loads_sibling_marketplace(self, make_plugin, marketplace_data) -> None:
        """marketplace.json next to plugin.json is loaded too."""
        root = make_plugin({"name": "my-plugin"}, marketplace=marketplace_data)

        loaded = loader.ManifestLoader().load(root)

        assert loaded.marketplace is not None
        assert loaded.marketplace.data["name"] == "team-tools"
        assert loaded.marketplace.label == ".claude-plugin/marketplace.json"

    def test_malformed_sibling_marketplace_is_fatal(self, make_plugin) -> None:
        """A broken marketplace.json fails loading like plugin.json does."""
        root = make_plugin({"name": "my-plugin"}, marketplace="{not json")

        with _pytest.raises(errors.MalformedManifestError):
            loader.ManifestLoader().load(root)


class TestLoadMarketplace:
    """Tests for ManifestLoader.load_marketplace method."""

    def test_loads_from_directory(self, make_plugin, marketplace_data) -> None:
        """A directory is searched like a plugin root."""
        root = make_plugin(marketplace=marketplace_data)

        manifest = loader.ManifestLoader().load_marketplace(root)

        assert manifest.data["name"] == "team-tools"
        assert manifest.root == root.resolve()

    def test_file_in_manifest_dir_resolves_to_repository_root(
        self, make_plugin, marketplace_data
    ) -> None:
        """Paths in .claude-plugin/marketplace.json resolve against the repo root."""
        root = make_plugin(marketplace=marketplace_data)

        manifest = loader.ManifestLoader().load_marketplace(
            root / ".claude-plugin" / "marketplace.json"
        )

        assert manifest.root == root.resolve()
        assert manifest.label == ".claude-plugin/marketplace.json"

    def test_top_level_file_resolves_to_its_directory(
        self, make_plugin, marketplace_data
    ) -> None:
        """A marketplace.json outside a manifest dir resolves against its parent."""
        root = make_plugin(marketplace=marketplace_data, manifest_dir=".")

        manifest = loader.ManifestLoader().load_marketplace(root / "marketplace.json")

        assert manifest.root == root.resolve()
        assert manifest.label == "marketplace.json"

    def test_missing_marketplace_raises_missing_manifest(self, tmp_path: _pathlib.Path) -> None:
        """A directory without marketplace.json is a MissingManifest failure."""
        with _pytest.raises(errors.MissingManifestError, match="No marketplace.json"):
            loader.ManifestLoader().load_marketplace(tmp_path)

    def test_missing_file_raises_missing_manifest(self, tmp_path: _pathlib.Path) -> None:
        """A marketplace.json path that doesn't exist is a MissingManifest failure."""
        with _pytest.raises(errors.MissingManifestError):
            loader.ManifestLoader().load_marketplace(tmp_path / "marketplace.json")


class TestReadJsonObject:
    """Tests for the read_json_object helper."""

    def test_error_converts_to_fatal_violation(self, tmp_path: _pathlib.Path) -> None:
        """Loader errors become fatal violations carrying their code."""
        path = tmp_path / "hooks.json"
        path.write_text("[]")

        with _pytest.raises(errors.ManifestError) as exc:
            loader.read_json_object(path, "hooks/hooks.json")

        violation = exc.value.to_violation()
        assert violation.code is errors.ViolationCode.MALFORMED_MANIFEST
        assert violation.severity is errors.Severity.FATAL
        assert violation.location == "hooks/hooks.json"
