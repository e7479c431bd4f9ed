"""
Shared constants for pluginlint.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

# Manifest files
PLUGIN_MANIFEST_NAME = "plugin.json"
"""File name of the plugin manifest."""

MARKETPLACE_MANIFEST_NAME = "marketplace.json"
"""File name of the marketplace manifest."""

DEFAULT_MANIFEST_DIRS = (".claude-plugin", ".")
"""Directories (relative to the plugin root) searched for manifests, in order."""

# Naming rules
PLUGIN_NAME_PATTERN = r"^[a-z0-9]+(-[a-z0-9]+)*$"
"""Kebab-case pattern for plugin and marketplace names."""

MAX_NAME_LENGTH = 64
"""Maximum length of a plugin name."""

# Paths
PATH_PREFIX = "./"
"""Every declared path must start with this prefix."""

PLUGIN_ROOT_TOKEN = "${CLAUDE_PLUGIN_ROOT}"
"""Placeholder expanded to the plugin's absolute root in hook commands."""

# Discovery patterns
COMMANDS_DIR = "commands"
"""Default directory scanned for command files."""

COMMAND_GLOB = "*.md"
"""Pattern matched inside the commands directory."""

SKILL_GLOB = "skills/*/SKILL.md"
"""Pattern used to discover skills (never overridable)."""

AGENT_SUFFIX = ".md"
"""Required suffix of every declared agent path."""
