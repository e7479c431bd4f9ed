"""
Validation report.

Combines a fatal loader failure (if any) or the full list of schema
violations and per-file warnings, plus the discovered components and
an overall pass/fail flag.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import pathlib as _pathlib
import typing as _typing

import pluginlint.discovery.discoverer as discoverer
import pluginlint.errors as errors
import pluginlint.manifest.models as models

EXIT_OK = 0
"""Every check passed."""

EXIT_FAILED = 1
"""Violations or warnings were reported."""

EXIT_FATAL = 2
"""A manifest could not be loaded."""


@_dataclasses.dataclass
class ValidationReport:
    """Outcome of one validation pass."""

    root: _pathlib.Path
    """Plugin (or marketplace repository) root that was checked."""

    fatal: errors.Violation | None = None
    """Loader failure that stopped the pass."""

    violations: list[errors.Violation] = _dataclasses.field(default_factory=list)
    """Schema violations, all collected."""

    warnings: list[errors.Violation] = _dataclasses.field(default_factory=list)
    """Per-file problems from discovery and path resolution."""

    manifest: models.PluginManifest | None = None
    """Validated plugin manifest."""

    marketplace: models.MarketplaceManifest | None = None
    """Validated marketplace manifest."""

    components: discoverer.DiscoveredComponents | None = None
    """Discovered component set (None when discovery didn't run)."""

    @property
    def passed(self) -> bool:
        """True only when there are no fatal errors, violations or warnings."""
        return self.fatal is None and not self.violations and not self.warnings

    @property
    def problems(self) -> list[errors.Violation]:
        """Every reported problem in order: fatal, violations, warnings."""
        result: list[errors.Violation] = []
        if self.fatal is not None:
            result.append(self.fatal)
        result.extend(self.violations)
        result.extend(self.warnings)
        return result

    @property
    def exit_code(self) -> int:
        """Process exit code for this report."""
        if self.fatal is not None:
            return EXIT_FATAL
        return EXIT_OK if self.passed else EXIT_FAILED

    def codes(self) -> list[errors.ViolationCode]:
        """Violation codes of every problem, in report order."""
        return [p.code for p in self.problems]

    def has_code(self, code: errors.ViolationCode) -> bool:
        """Whether any problem carries the given code."""
        return code in self.codes()

    def format_lines(self) -> list[str]:
        """One line per problem."""
        return [p.format() for p in self.problems]

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "root": str(self.root),
            "passed": self.passed,
            "fatal": self.fatal.to_dict() if self.fatal is not None else None,
            "violations": [v.to_dict() for v in self.violations],
            "warnings": [w.to_dict() for w in self.warnings],
            "plugin": self.manifest.name if self.manifest is not None else None,
            "marketplace": self.marketplace.name if self.marketplace is not None else None,
            "components": self.components.to_dict() if self.components is not None else None,
        }
