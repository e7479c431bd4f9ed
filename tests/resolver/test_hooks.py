"""
Tests for hooks parsing and plugin-root expansion.
"""

import json as _json
import pathlib as _pathlib

import pytest as _pytest

import pluginlint.errors as errors
import pluginlint.resolver.hooks as hooks

SESSION_START = {
    "hooks": {
        "SessionStart": [
            {
                "matcher": "*",
                "hooks": [
                    {"type": "command", "command": "${CLAUDE_PLUGIN_ROOT}/hooks/start.sh"},
                    {"type": "prompt", "prompt": "Be careful"},
                ],
            }
        ]
    }
}


class TestExpandPluginRoot:
    """Tests for expand_plugin_root."""

    def test_replaces_every_occurrence(self, tmp_path: _pathlib.Path) -> None:
        text = "${CLAUDE_PLUGIN_ROOT}/a.sh --config ${CLAUDE_PLUGIN_ROOT}/cfg.json"

        expanded = hooks.expand_plugin_root(text, tmp_path)

        assert expanded == f"{tmp_path}/a.sh --config {tmp_path}/cfg.json"

    def test_text_without_token_is_unchanged(self, tmp_path: _pathlib.Path) -> None:
        assert hooks.expand_plugin_root("echo hi", tmp_path) == "echo hi"

    def test_custom_token(self, tmp_path: _pathlib.Path) -> None:
        assert hooks.expand_plugin_root("@ROOT@/x", tmp_path, "@ROOT@") == f"{tmp_path}/x"


class TestParseHooks:
    """Tests for parse_hooks and HooksFile."""

    def test_full_layout(self) -> None:
        config = hooks.parse_hooks(SESSION_START)

        assert list(config.hooks) == ["SessionStart"]
        assert list(config.iter_commands()) == [
            ("hooks.SessionStart[0].hooks[0]", "${CLAUDE_PLUGIN_ROOT}/hooks/start.sh")
        ]

    def test_bare_event_mapping(self) -> None:
        """Inline hooks may map events directly."""
        config = hooks.parse_hooks(SESSION_START["hooks"])

        assert list(config.hooks) == ["SessionStart"]

    def test_invalid_layout(self) -> None:
        with _pytest.raises(ValueError, match="Invalid hooks configuration"):
            hooks.parse_hooks({"hooks": {"SessionStart": "not-a-list"}})


class TestLoadHooksFile:
    """Tests for load_hooks_file."""

    def test_loads_file(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "hooks.json"
        path.write_text(_json.dumps(SESSION_START))

        config = hooks.load_hooks_file(path)

        assert "SessionStart" in config.hooks

    def test_invalid_json(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "hooks.json"
        path.write_text("{oops")

        with _pytest.raises(errors.MalformedManifestError):
            hooks.load_hooks_file(path, "hooks/hooks.json")

    def test_wrong_layout_is_malformed(self, tmp_path: _pathlib.Path) -> None:
        path = tmp_path / "hooks.json"
        path.write_text('{"hooks": {"Stop": 3}}')

        with _pytest.raises(errors.MalformedManifestError) as exc:
            hooks.load_hooks_file(path, "hooks/hooks.json")

        assert exc.value.location == "hooks/hooks.json"


class TestResolveHookCommands:
    """Tests for command expansion and referenced files."""

    def test_resolves_commands(self, tmp_path: _pathlib.Path) -> None:
        commands = hooks.resolve_hook_commands(hooks.parse_hooks(SESSION_START), tmp_path)

        assert len(commands) == 1
        assert commands[0].raw == "${CLAUDE_PLUGIN_ROOT}/hooks/start.sh"
        assert commands[0].expanded == f"{tmp_path}/hooks/start.sh"

    def test_referenced_files_only_come_from_the_token(self, tmp_path: _pathlib.Path) -> None:
        command = hooks.ResolvedHookCommand(
            location="hooks.Stop[0].hooks[0]",
            raw="python3 ${CLAUDE_PLUGIN_ROOT}/scripts/check.py --log /tmp/x",
            expanded=f"python3 {tmp_path}/scripts/check.py --log /tmp/x",
        )

        files = hooks.referenced_plugin_files(command, tmp_path)

        assert files == [tmp_path / "scripts" / "check.py"]

    def test_root_with_spaces_stays_one_path(self, tmp_path: _pathlib.Path) -> None:
        """A plugin root containing a space is not split into two words."""
        root = tmp_path / "my plugins" / "tools"
        raw = "bash ${CLAUDE_PLUGIN_ROOT}/hooks/start.sh"
        command = hooks.ResolvedHookCommand(
            location="hooks.SessionStart[0].hooks[0]",
            raw=raw,
            expanded=hooks.expand_plugin_root(raw, root),
        )

        files = hooks.referenced_plugin_files(command, root)

        assert files == [root / "hooks" / "start.sh"]

    def test_command_without_token_references_nothing(self, tmp_path: _pathlib.Path) -> None:
        command = hooks.ResolvedHookCommand(
            location="hooks.Stop[0].hooks[0]",
            raw=f"{tmp_path}/scripts/check.py",
            expanded=f"{tmp_path}/scripts/check.py",
        )

        assert hooks.referenced_plugin_files(command, tmp_path) == []
