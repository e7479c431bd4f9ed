"""
Shared pytest fixtures for pluginlint tests.

This file is automatically loaded by pytest. Fixtures defined here are
available to all test files without explicit imports.
"""

import json as _json
import os as _os
import pathlib as _pathlib
import typing as _typing

import pytest as _pytest

import pluginlint.config as config

PluginFactory = _typing.Callable[..., _pathlib.Path]


def _write(path: _pathlib.Path, content: str, mode: int = 0o644) -> _pathlib.Path:
    """Write a file with an explicit mode (the umask may be stricter than 022)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    path.chmod(mode)
    return path


@_pytest.fixture(autouse=True)
def isolated_env(
    tmp_path_factory: _pytest.TempPathFactory,
    monkeypatch: _pytest.MonkeyPatch,
) -> _pathlib.Path:
    """
    Isolate every test from the real environment.

    Clears PLUGINLINT_* variables, points HOME at an empty directory (no
    user config) and runs from an empty working directory (no project
    config). Returns the working directory.
    """
    for key in list(_os.environ):
        if key.startswith("PLUGINLINT_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path_factory.mktemp("home")))
    workdir = tmp_path_factory.mktemp("workdir")
    monkeypatch.chdir(workdir)
    return workdir


@_pytest.fixture
def settings() -> config.Settings:
    """Default settings (environment already isolated)."""
    return config.Settings()


@_pytest.fixture
def write_file() -> _typing.Callable[..., _pathlib.Path]:
    """Write a file with mode 644 unless told otherwise."""
    return _write


@_pytest.fixture
def skill_text() -> _typing.Callable[..., str]:
    """Build SKILL.md content with valid frontmatter."""

    def _build(name: str = "testing", description: str = "Run the test suite") -> str:
        return f"---\nname: {name}\ndescription: {description}\n---\n\n# {name}\n\nInstructions.\n"

    return _build


@_pytest.fixture
def make_plugin(tmp_path: _pathlib.Path) -> PluginFactory:
    """
    Factory that lays out a plugin directory.

    Usage:
        root = make_plugin(
            {"name": "my-plugin"},
            files={"commands/build.md": "# Build"},
        )
    """

    def _make(
        manifest: dict[str, _typing.Any] | str | None = None,
        files: dict[str, str] | None = None,
        *,
        name: str = "plugin",
        manifest_dir: str = ".claude-plugin",
        marketplace: dict[str, _typing.Any] | str | None = None,
    ) -> _pathlib.Path:
        root = tmp_path / name
        root.mkdir(parents=True, exist_ok=True)
        if manifest is not None:
            text = manifest if isinstance(manifest, str) else _json.dumps(manifest, indent=2)
            _write(root / manifest_dir / "plugin.json", text)
        if marketplace is not None:
            text = (
                marketplace if isinstance(marketplace, str) else _json.dumps(marketplace, indent=2)
            )
            _write(root / manifest_dir / "marketplace.json", text)
        for relative, content in (files or {}).items():
            _write(root / relative, content)
        return root

    return _make


@_pytest.fixture
def marketplace_data() -> dict[str, _typing.Any]:
    """A valid marketplace.json object listing the plugin at the repo root."""
    return {
        "name": "team-tools",
        "owner": {"name": "Team", "email": "team@example.com"},
        "plugins": [{"name": "my-plugin", "source": "./"}],
    }
