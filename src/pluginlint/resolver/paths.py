"""
Path resolution and per-file checks.

Every discovered or declared file must exist and be readable; skills
get their frontmatter style checked; hook commands get the plugin-root
placeholder expanded and their plugin-local files checked. Each problem
is a per-file warning: checking continues with the next file.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib
import stat as _stat
import typing as _typing

import pluginlint.constants as constants
import pluginlint.discovery.discoverer as discoverer
import pluginlint.discovery.strategies as strategies
import pluginlint.errors as errors
import pluginlint.manifest.models as models
import pluginlint.resolver.frontmatter as frontmatter
import pluginlint.resolver.hooks as hooks

_logger = _logging.getLogger(__name__)

Code = errors.ViolationCode


class PathResolver:
    """
    Resolves component paths against a plugin root and checks them.

    Example:
        resolver = PathResolver(root)
        warnings = resolver.check_components(result.components)
    """

    def __init__(
        self,
        root: _pathlib.Path,
        *,
        token: str = constants.PLUGIN_ROOT_TOKEN,
        check_permissions: bool = True,
        manifest_label: str = constants.PLUGIN_MANIFEST_NAME,
    ) -> None:
        """
        Initialize the resolver.

        Args:
            root: Plugin root directory.
            token: Plugin-root placeholder used in hook commands.
            check_permissions: Report .md files that aren't world-readable.
            manifest_label: Label of plugin.json for inline-hook locations.
        """
        self._root = root.resolve()
        self._token = token
        self._check_permissions = check_permissions
        self._manifest_label = manifest_label

    @property
    def root(self) -> _pathlib.Path:
        """Absolute plugin root."""
        return self._root

    def expand(self, text: str) -> str:
        """Expand the plugin-root placeholder in text."""
        return hooks.expand_plugin_root(text, self._root, self._token)

    def check_exists(self, component: discoverer.Component) -> errors.Violation | None:
        """DanglingReference when a component's file is missing."""
        if component.path.is_file():
            return None
        reason = "is not a file" if component.path.exists() else "does not exist"
        return errors.warning(
            Code.DANGLING_REFERENCE,
            f"Referenced {component.kind.value} {reason}: {component.path}",
            component.relative_path,
        )

    def check_commands_directory(
        self,
        manifest: models.PluginManifest,
    ) -> errors.Violation | None:
        """DanglingReference when a declared commands directory is missing."""
        if not manifest.commands_is_directory():
            return None
        directory = _typing.cast(str, manifest.commands)
        path = discoverer.resolve_relative(self._root, directory)
        if path.is_dir():
            return None
        reason = "is not a directory" if path.exists() else "does not exist"
        return errors.warning(
            Code.DANGLING_REFERENCE,
            f"Commands directory {reason}: {path}",
            f"{self._manifest_label}:commands",
        )

    def check_readable(
        self,
        path: _pathlib.Path,
        location: str | None = None,
    ) -> errors.Violation | None:
        """
        UnreadableFile when a file can't be read.

        Markdown files must also be world-readable (e.g. 644); stricter
        modes such as 600 hide them from discovery in some hosts.
        """
        location = location or str(path)
        try:
            with path.open("rb"):
                pass
        except OSError as e:
            return errors.warning(Code.UNREADABLE_FILE, f"Cannot read file: {e}", location)

        if self._check_permissions and path.suffix == ".md":
            mode = _stat.S_IMODE(path.stat().st_mode)
            if not mode & _stat.S_IROTH:
                return errors.warning(
                    Code.UNREADABLE_FILE,
                    f"File mode {mode:03o} is not world-readable (expected 644)",
                    location,
                )
        return None

    def check_skill(self, component: discoverer.Component) -> list[errors.Violation]:
        """Check a skill's frontmatter description style."""
        try:
            content = component.path.read_text(encoding="utf-8")
            frontmatter_text, _body = frontmatter.split_frontmatter(content)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            _logger.debug("Skipping style check for %s: %s", component.relative_path, e)
            return []

        violation = frontmatter.check_description_style(
            frontmatter_text, component.relative_path
        )
        return [violation] if violation is not None else []

    def resolve_hooks(self, source: discoverer.HooksSource) -> list[errors.Violation]:
        """
        Parse the hooks source and check files its commands reference.

        A hooks file that is missing is already a DanglingReference from
        check_components; one that doesn't parse is a MalformedManifest
        warning for that file only.
        """
        if source.file is not None:
            if not source.file.path.is_file():
                return []
            label = source.file.relative_path
            try:
                config = hooks.load_hooks_file(source.file.path, label)
            except errors.ManifestError as e:
                return [e.to_violation(errors.Severity.WARNING)]
        else:
            label = f"{self._manifest_label}:hooks"
            try:
                config = hooks.parse_hooks(source.inline or {})
            except ValueError as e:
                return [errors.warning(Code.MALFORMED_MANIFEST, str(e), label)]

        warnings: list[errors.Violation] = []
        for command in hooks.resolve_hook_commands(config, self._root, self._token):
            _logger.debug("Hook %s expands to %r", command.location, command.expanded)
            for path in hooks.referenced_plugin_files(command, self._root, self._token):
                if not path.exists():
                    warnings.append(
                        errors.warning(
                            Code.DANGLING_REFERENCE,
                            f"Hook command references a missing file: {path}",
                            f"{label}:{command.location}",
                        )
                    )
        return warnings

    def check_components(
        self,
        components: discoverer.DiscoveredComponents,
    ) -> list[errors.Violation]:
        """
        Run every per-file check over a discovered component set.

        Returns:
            All warnings, in component order.
        """
        warnings: list[errors.Violation] = []

        for component in components.files():
            problem = self.check_exists(component) or self.check_readable(
                component.path, component.relative_path
            )
            if problem is not None:
                warnings.append(problem)
                continue
            if component.kind is strategies.ComponentKind.SKILL:
                warnings.extend(self.check_skill(component))

        if components.hooks is not None:
            warnings.extend(self.resolve_hooks(components.hooks))

        return warnings

    def check_marketplace_sources(
        self,
        manifest: models.MarketplaceManifest,
        source_label: str = constants.MARKETPLACE_MANIFEST_NAME,
    ) -> list[errors.Violation]:
        """
        Check that local plugin sources resolve to directories.

        The resolver's root is the marketplace repository root, so a
        source of "./" resolves to the root itself.
        """
        warnings: list[errors.Violation] = []
        for i, entry in enumerate(manifest.plugins):
            if not isinstance(entry.source, str):
                continue
            path = discoverer.resolve_relative(self._root, entry.source)
            if not path.is_dir():
                warnings.append(
                    errors.warning(
                        Code.DANGLING_REFERENCE,
                        f"Plugin '{entry.name}' source is not a directory: {path}",
                        f"{source_label}:plugins[{i}].source",
                    )
                )
        return warnings
