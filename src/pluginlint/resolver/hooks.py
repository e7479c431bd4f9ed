"""
Hooks configuration parsing and plugin-root expansion.

Hooks are configured either inline in plugin.json or in a separate JSON
file referenced by path. Both use the same layout:

```json
{
  "hooks": {
    "SessionStart": [
      {
        "matcher": "*",
        "hooks": [
          {"type": "command", "command": "${CLAUDE_PLUGIN_ROOT}/hooks/start.sh"}
        ]
      }
    ]
  }
}
```

Inline objects may also omit the outer "hooks" key and map event names
directly. Beyond this shape the contents are opaque to pluginlint.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import pathlib as _pathlib
import shlex as _shlex
import typing as _typing

import pydantic as _pydantic

import pluginlint.constants as constants
import pluginlint.errors as errors
import pluginlint.manifest.loader as loader


class HookCommand(_pydantic.BaseModel):
    """A single hook action."""

    model_config = _pydantic.ConfigDict(extra="allow")

    type: str = "command"
    """Hook type; only "command" hooks reference files."""

    command: str | None = None
    """Command line, possibly containing the plugin-root placeholder."""


class HookMatcher(_pydantic.BaseModel):
    """A matcher group with the hooks it triggers."""

    model_config = _pydantic.ConfigDict(extra="allow")

    matcher: str | None = None
    """Tool/event pattern this group applies to."""

    hooks: list[HookCommand] = _pydantic.Field(default_factory=list)
    """Hook actions in this group."""


class HooksFile(_pydantic.BaseModel):
    """Hooks configuration keyed by lifecycle event name."""

    model_config = _pydantic.ConfigDict(extra="allow")

    hooks: dict[str, list[HookMatcher]] = _pydantic.Field(default_factory=dict)
    """Matcher groups per event (e.g. SessionStart, PreToolUse)."""

    def iter_commands(self) -> _typing.Iterator[tuple[str, str]]:
        """Yield (location, command) for every command hook."""
        for event, matchers in self.hooks.items():
            for i, group in enumerate(matchers):
                for j, hook in enumerate(group.hooks):
                    if hook.command is not None:
                        yield f"hooks.{event}[{i}].hooks[{j}]", hook.command


@_dataclasses.dataclass(frozen=True)
class ResolvedHookCommand:
    """A hook command with the plugin-root placeholder expanded."""

    location: str
    """Where the command was declared."""

    raw: str
    """Command as written."""

    expanded: str
    """Command after placeholder substitution."""


def expand_plugin_root(
    text: str,
    root: _pathlib.Path,
    token: str = constants.PLUGIN_ROOT_TOKEN,
) -> str:
    """
    Replace the plugin-root placeholder with the plugin's absolute root.

    This is plain string substitution; nothing is evaluated by a shell.
    """
    return text.replace(token, str(root))


def parse_hooks(data: _typing.Mapping[str, _typing.Any]) -> HooksFile:
    """
    Parse a hooks object.

    Accepts the full layout ({"hooks": {...}}) or a bare event mapping.

    Raises:
        ValueError: If the object doesn't match the hooks layout.
    """
    payload = dict(data)
    if not isinstance(payload.get("hooks"), dict):
        payload = {"hooks": payload}
    try:
        return HooksFile.model_validate(payload)
    except _pydantic.ValidationError as e:
        raise ValueError(f"Invalid hooks configuration: {e}") from e


def load_hooks_file(path: _pathlib.Path, label: str | None = None) -> HooksFile:
    """
    Load a hooks JSON file.

    Raises:
        MissingManifestError: If the file doesn't exist.
        MalformedManifestError: If it isn't valid JSON or doesn't match
            the hooks layout.
    """
    data = loader.read_json_object(path, label)
    try:
        return parse_hooks(data)
    except ValueError as e:
        raise errors.MalformedManifestError(str(e), label or str(path)) from e


def resolve_hook_commands(
    hooks: HooksFile,
    root: _pathlib.Path,
    token: str = constants.PLUGIN_ROOT_TOKEN,
) -> list[ResolvedHookCommand]:
    """Expand the plugin-root placeholder in every hook command."""
    return [
        ResolvedHookCommand(
            location=location,
            raw=command,
            expanded=expand_plugin_root(command, root, token),
        )
        for location, command in hooks.iter_commands()
    ]


def referenced_plugin_files(
    command: ResolvedHookCommand,
    root: _pathlib.Path,
    token: str = constants.PLUGIN_ROOT_TOKEN,
) -> list[_pathlib.Path]:
    """
    Files inside the plugin root that a hook command refers to.

    Only arguments that came from the placeholder are considered; other
    words (interpreters, flags, system paths) are left alone. The raw
    command is split before expansion, so a root containing spaces
    stays one word.
    """
    if token not in command.raw:
        return []
    try:
        words = _shlex.split(command.raw)
    except ValueError:
        words = command.raw.split()

    root_prefix = str(root)
    expanded = [expand_plugin_root(word, root, token) for word in words if token in word]
    return [
        _pathlib.Path(word)
        for word in expanded
        if word == root_prefix or word.startswith(root_prefix + "/")
    ]
