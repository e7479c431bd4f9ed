"""
The validation pipeline.

Loader → Validator → Discoverer → Resolver, run once per invocation:

- Loader failures are fatal; the report carries the failure and nothing
  else runs.
- Schema violations are collected in full. Discovery needs a validated
  manifest, so it is skipped when there are any.
- Discovery and resolver problems are per-file warnings; every file is
  still checked, but the pass fails.
"""

from __future__ import annotations

import logging as _logging
import pathlib as _pathlib

import pluginlint.config as config
import pluginlint.discovery.discoverer as discoverer
import pluginlint.errors as errors
import pluginlint.manifest.loader as loader
import pluginlint.manifest.models as models
import pluginlint.report as report_module
import pluginlint.resolver.paths as paths
import pluginlint.validation.validator as validator

_logger = _logging.getLogger(__name__)


def validate_plugin(
    root: _pathlib.Path,
    settings: config.Settings | None = None,
) -> report_module.ValidationReport:
    """
    Validate a plugin directory.

    Args:
        root: Plugin root directory.
        settings: Settings to use (loaded from the environment if None).

    Returns:
        ValidationReport for the plugin (and its sibling marketplace).
        A root without plugin.json is a fatal MissingManifest, even when
        it holds a marketplace.json.
    """
    settings = settings or config.Settings()
    report = report_module.ValidationReport(root=root)

    manifest_loader = loader.ManifestLoader(settings.discovery)
    try:
        loaded = manifest_loader.load(root)
    except errors.ManifestError as e:
        _logger.debug("Loading %s failed: %s", root, e)
        report.fatal = e.to_violation()
        return report
    report.root = loaded.root

    schema = validator.SchemaValidator(settings.rules)
    outcome = schema.validate_plugin(loaded.plugin.data, source=loaded.plugin.label)
    report.violations.extend(outcome.violations)
    report.manifest = outcome.manifest

    resolver = paths.PathResolver(
        loaded.root,
        token=settings.discovery.plugin_root_token,
        check_permissions=settings.rules.check_permissions,
        manifest_label=loaded.plugin.label,
    )

    if loaded.marketplace is not None:
        _check_marketplace(report, loaded.marketplace, schema, resolver)

    if outcome.manifest is None:
        return report

    result = discoverer.ComponentDiscoverer(settings.discovery).discover(
        outcome.manifest, loaded.root
    )
    report.components = result.components
    report.warnings.extend(result.warnings)
    missing_commands = resolver.check_commands_directory(outcome.manifest)
    if missing_commands is not None:
        report.warnings.append(missing_commands)
    report.warnings.extend(resolver.check_components(result.components))

    _logger.debug(
        "Validated %s: %d violation(s), %d warning(s)",
        loaded.root,
        len(report.violations),
        len(report.warnings),
    )
    return report


def validate_marketplace(
    path: _pathlib.Path,
    settings: config.Settings | None = None,
) -> report_module.ValidationReport:
    """
    Validate a marketplace manifest on its own.

    Args:
        path: marketplace.json, or a directory containing one.
        settings: Settings to use (loaded from the environment if None).

    Returns:
        ValidationReport for the marketplace.
    """
    settings = settings or config.Settings()
    report = report_module.ValidationReport(root=path)

    manifest_loader = loader.ManifestLoader(settings.discovery)
    try:
        marketplace = manifest_loader.load_marketplace(path)
    except errors.ManifestError as e:
        report.fatal = e.to_violation()
        return report
    report.root = marketplace.root

    schema = validator.SchemaValidator(settings.rules)
    resolver = paths.PathResolver(
        marketplace.root,
        token=settings.discovery.plugin_root_token,
        check_permissions=settings.rules.check_permissions,
    )
    _check_marketplace(report, marketplace, schema, resolver)
    return report


def _check_marketplace(
    report: report_module.ValidationReport,
    marketplace: models.ManifestFile,
    schema: validator.SchemaValidator,
    resolver: paths.PathResolver,
) -> None:
    """Validate a marketplace file and check its local plugin sources."""
    outcome = schema.validate_marketplace(marketplace.data, source=marketplace.label)
    report.violations.extend(outcome.violations)
    report.marketplace = outcome.manifest
    if outcome.manifest is not None:
        report.warnings.extend(
            resolver.check_marketplace_sources(outcome.manifest, marketplace.label)
        )
