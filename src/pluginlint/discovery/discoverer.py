"""
Component discovery for a validated plugin.

Builds the discovered component set by combining implicit matches
(commands/*.md, skills/*/SKILL.md) with explicit manifest declarations
(agents, hooks). The set is recomputed on every call and never cached.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import pluginlint.config.types as config_types
import pluginlint.constants as constants
import pluginlint.discovery.strategies as strategies
import pluginlint.errors as errors
import pluginlint.manifest.models as models
import pluginlint.resolver.frontmatter as frontmatter

_logger = _logging.getLogger(__name__)

Kind = strategies.ComponentKind


def resolve_relative(root: _pathlib.Path, relative: str) -> _pathlib.Path:
    """Join a './'-style manifest path onto the plugin root."""
    return root.joinpath(*_pathlib.PurePosixPath(relative).parts)


@_dataclasses.dataclass(frozen=True)
class Component:
    """A single component file of a plugin."""

    kind: strategies.ComponentKind
    """What kind of component this is."""

    relative_path: str
    """Path as declared or discovered, './'-prefixed."""

    path: _pathlib.Path
    """Absolute path on disk."""

    origin: strategies.Origin
    """Whether it was globbed or declared."""

    @property
    def name(self) -> str:
        """Component name: the skill directory, or the file stem."""
        if self.kind is Kind.SKILL:
            return self.path.parent.name
        return self.path.stem

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "kind": self.kind.value,
            "name": self.name,
            "path": self.relative_path,
            "origin": self.origin.value,
        }


@_dataclasses.dataclass(frozen=True)
class HooksSource:
    """The single hooks declaration of a plugin: a file or an inline object."""

    file: Component | None = None
    """Hooks manifest file, when declared by path."""

    inline: dict[str, _typing.Any] | None = None
    """Inline hooks object, when declared in plugin.json."""

    @property
    def is_inline(self) -> bool:
        """Whether hooks are declared inline."""
        return self.inline is not None

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        if self.file is not None:
            return {"type": "file", "path": self.file.relative_path}
        inline = self.inline or {}
        events = inline.get("hooks", inline)
        return {"type": "inline", "events": sorted(events) if isinstance(events, dict) else []}


@_dataclasses.dataclass(frozen=True)
class DiscoveredComponents:
    """
    Every component of one plugin.

    Ordering is deterministic: globbed components are sorted by path,
    declared components keep manifest order.
    """

    commands: tuple[Component, ...] = ()
    skills: tuple[Component, ...] = ()
    agents: tuple[Component, ...] = ()
    hooks: HooksSource | None = None

    def files(self) -> _typing.Iterator[Component]:
        """Iterate over every component backed by a file."""
        yield from self.commands
        yield from self.skills
        yield from self.agents
        if self.hooks is not None and self.hooks.file is not None:
            yield self.hooks.file

    def counts(self) -> dict[str, int]:
        """Number of components per kind."""
        return {
            "commands": len(self.commands),
            "skills": len(self.skills),
            "agents": len(self.agents),
            "hooks": 0 if self.hooks is None else 1,
        }

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "commands": [c.to_dict() for c in self.commands],
            "skills": [s.to_dict() for s in self.skills],
            "agents": [a.to_dict() for a in self.agents],
            "hooks": self.hooks.to_dict() if self.hooks is not None else None,
        }


@_dataclasses.dataclass
class DiscoveryResult:
    """Discovered components plus per-file warnings."""

    components: DiscoveredComponents
    """The discovered component set."""

    warnings: list[errors.Violation] = _dataclasses.field(default_factory=list)
    """Skills excluded from the set, and why."""


class ComponentDiscoverer:
    """
    Discovers plugin components using one strategy per kind.

    Commands default to globbing commands/*.md; a string `commands`
    field moves the glob to another directory and a list replaces the
    glob with exactly those files. Skills are always globbed from
    skills/*/SKILL.md. Agents and hooks come from the manifest only.
    """

    def __init__(self, config: config_types.DiscoveryConfig | None = None) -> None:
        """
        Initialize the discoverer.

        Args:
            config: Discovery settings (recursive command scanning).
        """
        self._config = config or config_types.DiscoveryConfig()

    def strategy_for(
        self,
        kind: strategies.ComponentKind,
        manifest: models.PluginManifest,
    ) -> strategies.DiscoveryStrategy:
        """Select the discovery strategy for a component kind."""
        if kind is Kind.COMMAND:
            if manifest.commands_is_explicit():
                return strategies.Explicit("commands")
            directory = (
                manifest.commands
                if isinstance(manifest.commands, str)
                else constants.COMMANDS_DIR
            )
            return strategies.Implicit(
                strategies.command_pattern(
                    directory, recursive=self._config.recursive_commands
                )
            )
        return strategies.DEFAULT_STRATEGIES[kind]

    def discover(
        self,
        manifest: models.PluginManifest,
        root: _pathlib.Path,
    ) -> DiscoveryResult:
        """
        Discover every component of a plugin.

        Args:
            manifest: Validated plugin manifest.
            root: Plugin root directory.

        Returns:
            DiscoveryResult with the component set and skill warnings.
        """
        root = root.resolve()
        warnings: list[errors.Violation] = []

        commands = self._collect(Kind.COMMAND, manifest, root)
        skills = self._filter_skills(self._collect(Kind.SKILL, manifest, root), warnings)
        agents = self._collect(Kind.AGENT, manifest, root)
        hooks = self._discover_hooks(manifest, root)

        components = DiscoveredComponents(
            commands=tuple(commands),
            skills=tuple(skills),
            agents=tuple(agents),
            hooks=hooks,
        )
        _logger.debug("Discovered in %s: %s", root, components.counts())
        return DiscoveryResult(components=components, warnings=warnings)

    def _collect(
        self,
        kind: strategies.ComponentKind,
        manifest: models.PluginManifest,
        root: _pathlib.Path,
    ) -> list[Component]:
        """Apply the kind's strategy."""
        strategy = self.strategy_for(kind, manifest)
        if isinstance(strategy, strategies.Implicit):
            return self._glob(kind, root, strategy.pattern)

        declared = getattr(manifest, strategy.field) or []
        return [
            Component(
                kind=kind,
                relative_path=rel,
                path=resolve_relative(root, rel),
                origin=strategies.Origin.EXPLICIT,
            )
            for rel in declared
        ]

    def _glob(
        self,
        kind: strategies.ComponentKind,
        root: _pathlib.Path,
        pattern: str,
    ) -> list[Component]:
        """Glob relative to root; only regular files, sorted by path."""
        matches = sorted(
            (p for p in root.glob(pattern) if p.is_file()),
            key=lambda p: p.relative_to(root).as_posix(),
        )
        return [
            Component(
                kind=kind,
                relative_path=constants.PATH_PREFIX + p.relative_to(root).as_posix(),
                path=p,
                origin=strategies.Origin.IMPLICIT,
            )
            for p in matches
        ]

    def _filter_skills(
        self,
        skills: list[Component],
        warnings: list[errors.Violation],
    ) -> list[Component]:
        """Drop skills whose SKILL.md lacks usable frontmatter."""
        kept: list[Component] = []
        for skill in skills:
            try:
                content = skill.path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                warnings.append(
                    errors.warning(
                        errors.ViolationCode.UNREADABLE_FILE,
                        f"Cannot read skill file: {e}",
                        skill.relative_path,
                    )
                )
                continue

            try:
                frontmatter.parse_skill_markdown(content)
            except ValueError as e:
                _logger.debug("Excluding skill %s: %s", skill.relative_path, e)
                warnings.append(
                    errors.warning(
                        errors.ViolationCode.INVALID_SKILL_FRONTMATTER,
                        f"Skill excluded: {e}",
                        skill.relative_path,
                    )
                )
                continue

            kept.append(skill)
        return kept

    def _discover_hooks(
        self,
        manifest: models.PluginManifest,
        root: _pathlib.Path,
    ) -> HooksSource | None:
        """At most one hooks source: a file path or an inline object."""
        value = manifest.hooks
        if value is None:
            return None
        if isinstance(value, str):
            return HooksSource(
                file=Component(
                    kind=Kind.HOOKS,
                    relative_path=value,
                    path=resolve_relative(root, value),
                    origin=strategies.Origin.EXPLICIT,
                )
            )
        return HooksSource(inline=dict(value))
