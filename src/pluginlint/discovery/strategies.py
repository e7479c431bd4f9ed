"""
Discovery strategies per component kind.

Commands and skills are found implicitly by globbing the plugin tree;
agents and hooks are only ever taken from the manifest. Each kind maps
to exactly one strategy.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum

import pluginlint.constants as constants


class ComponentKind(str, _enum.Enum):
    """Kinds of plugin components."""

    COMMAND = "command"
    SKILL = "skill"
    AGENT = "agent"
    HOOKS = "hooks"


class Origin(str, _enum.Enum):
    """How a component was found."""

    IMPLICIT = "implicit"
    """Matched by a glob pattern."""

    EXPLICIT = "explicit"
    """Declared in the manifest."""


@_dataclasses.dataclass(frozen=True)
class Implicit:
    """Find components by globbing relative to the plugin root."""

    pattern: str
    """Glob pattern (e.g. 'commands/*.md')."""


@_dataclasses.dataclass(frozen=True)
class Explicit:
    """Take components verbatim from a manifest field."""

    field: str
    """Manifest field name (e.g. 'agents')."""


DiscoveryStrategy = Implicit | Explicit


DEFAULT_STRATEGIES: dict[ComponentKind, DiscoveryStrategy] = {
    ComponentKind.COMMAND: Implicit(f"{constants.COMMANDS_DIR}/{constants.COMMAND_GLOB}"),
    ComponentKind.SKILL: Implicit(constants.SKILL_GLOB),
    ComponentKind.AGENT: Explicit("agents"),
    ComponentKind.HOOKS: Explicit("hooks"),
}
"""Default strategy per component kind."""


def command_pattern(directory: str, *, recursive: bool = False) -> str:
    """
    Build the command glob for a directory.

    Args:
        directory: Directory relative to the plugin root ('./commands/',
            'commands', '.', ...).
        recursive: Match in subdirectories too.
    """
    cleaned = directory.strip()
    if cleaned.startswith(constants.PATH_PREFIX):
        cleaned = cleaned[len(constants.PATH_PREFIX):]
    cleaned = cleaned.strip("/")
    if cleaned == ".":
        cleaned = ""

    glob = f"**/{constants.COMMAND_GLOB}" if recursive else constants.COMMAND_GLOB
    return f"{cleaned}/{glob}" if cleaned else glob
