"""
Violation records and exception types.

Two kinds of problems exist:
- Fatal loader failures, raised as ManifestError subclasses. Nothing
  downstream can run without a parsed manifest.
- Everything else, returned as Violation records and accumulated so a
  single pass reports every problem at once.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import typing as _typing


class ViolationCode(str, _enum.Enum):
    """Stable identifiers for every problem pluginlint can report."""

    # Loader (fatal)
    MISSING_MANIFEST = "MissingManifest"
    MALFORMED_MANIFEST = "MalformedManifest"

    # Schema validator (collected)
    INVALID_NAME = "InvalidName"
    INVALID_COMMANDS_TYPE = "InvalidCommandsType"
    INVALID_AGENT_PATH = "InvalidAgentPath"
    INVALID_HOOKS_TYPE = "InvalidHooksType"
    UNEXPECTED_SKILLS_FIELD = "UnexpectedSkillsField"
    INVALID_PATH_PREFIX = "InvalidPathPrefix"
    MISSING_PLUGIN_FIELD = "MissingPluginField"
    MISSING_OWNER_FIELD = "MissingOwnerField"
    DUPLICATE_PLUGIN_NAME = "DuplicatePluginName"

    # Discoverer / resolver (per-file warnings)
    DANGLING_REFERENCE = "DanglingReference"
    INVALID_DESCRIPTION_STYLE = "InvalidDescriptionStyle"
    INVALID_SKILL_FRONTMATTER = "InvalidSkillFrontmatter"
    UNREADABLE_FILE = "UnreadableFile"


class Severity(str, _enum.Enum):
    """How a violation affects the overall result."""

    FATAL = "fatal"
    """Loader failure; the pass stopped."""

    ERROR = "error"
    """Manifest schema violation."""

    WARNING = "warning"
    """Per-file problem; processing continued but the pass fails."""


@_dataclasses.dataclass(frozen=True)
class Violation:
    """A single reported problem."""

    code: ViolationCode
    """What kind of problem this is."""

    message: str
    """Human-readable explanation."""

    location: str | None = None
    """Where it was found (e.g. 'plugin.json:agents[0]' or a file path)."""

    severity: Severity = Severity.ERROR
    """How the problem affects the result."""

    def format(self) -> str:
        """Format as a single report line."""
        where = f" {self.location}:" if self.location else ""
        return f"{self.severity.value}: [{self.code.value}]{where} {self.message}"

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "code": self.code.value,
            "severity": self.severity.value,
            "message": self.message,
            "location": self.location,
        }


def warning(
    code: ViolationCode,
    message: str,
    location: str | None = None,
) -> Violation:
    """Shorthand for a per-file warning."""
    return Violation(code=code, message=message, location=location, severity=Severity.WARNING)


class PluginLintError(Exception):
    """Base class for pluginlint exceptions."""

    pass


class ManifestError(PluginLintError):
    """A manifest could not be loaded at all."""

    code: _typing.ClassVar[ViolationCode] = ViolationCode.MALFORMED_MANIFEST

    def __init__(self, message: str, location: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.location = location

    def to_violation(self, severity: Severity = Severity.FATAL) -> Violation:
        """Convert to a Violation record for reporting."""
        return Violation(
            code=self.code,
            message=self.message,
            location=self.location,
            severity=severity,
        )


class MissingManifestError(ManifestError):
    """plugin.json (or the plugin root itself) does not exist."""

    code = ViolationCode.MISSING_MANIFEST


class MalformedManifestError(ManifestError):
    """A manifest file is not valid JSON or not a JSON object."""

    code = ViolationCode.MALFORMED_MANIFEST


class UnreadableManifestError(ManifestError):
    """A manifest file exists but cannot be read."""

    code = ViolationCode.UNREADABLE_FILE
