"""
Main CLI entry point for pluginlint.

Provides the command-line interface using Click.
"""

import json as _json
import logging as _logging
import pathlib as _pathlib
import typing as _typing

import click as _click
import yaml as _yaml

import pluginlint
import pluginlint.config as config
import pluginlint.errors as errors
import pluginlint.pipeline as pipeline
import pluginlint.report as report_module
import pluginlint.resolver.frontmatter as frontmatter
import pluginlint.resolver.paths as paths

# Custom Click context settings for better help formatting
CONTEXT_SETTINGS: dict[str, _typing.Any] = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 100,
}

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(settings: config.Settings, verbose: bool) -> None:
    """Set the pluginlint log level; --verbose also installs a stderr handler."""
    level = _logging.DEBUG if verbose else getattr(_logging, settings.logging.level.upper())
    _logging.getLogger("pluginlint").setLevel(level)
    if verbose:
        _logging.basicConfig(format=_LOG_FORMAT, level=level, force=True)


def _use_json(ctx: _click.Context, json_output: bool) -> bool:
    """Whether output should be JSON (flag or configured default)."""
    settings: config.Settings = ctx.obj["settings"]
    return json_output or settings.output.format == "json"


def _status_line(report: report_module.ValidationReport) -> str:
    if report.fatal is not None:
        return "  Status: ✗ could not be loaded"
    if report.violations:
        return "  Status: ✗ invalid"
    if report.warnings:
        return "  Status: ✗ failed with warnings"
    return "  Status: ✓ valid"


def _echo_problems(report: report_module.ValidationReport) -> None:
    for line in report.format_lines():
        _click.echo(f"  {line}")


@_click.group(context_settings=CONTEXT_SETTINGS)
@_click.version_option(pluginlint.__version__, "-v", "--version", prog_name="pluginlint")
@_click.option(
    "--verbose",
    is_flag=True,
    help="Enable debug logging on stderr",
)
@_click.pass_context
def cli(ctx: _click.Context, verbose: bool) -> None:
    """
    pluginlint - validate plugin manifests and discover plugin components.

    \b
    Examples:
        pluginlint validate ./my-plugin            # Validate a plugin
        pluginlint validate ./my-plugin --json     # Machine-readable report
        pluginlint discover ./my-plugin            # List discovered components
        pluginlint marketplace ./my-marketplace    # Validate a marketplace
        pluginlint skill ./skills/testing          # Check one SKILL.md
    """
    settings = config.Settings()
    _configure_logging(settings, verbose)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


# =============================================================================
# Validation Commands
# =============================================================================


@cli.command(name="validate")
@_click.argument("root", type=_click.Path(path_type=_pathlib.Path))
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def validate(ctx: _click.Context, root: _pathlib.Path, json_output: bool) -> None:
    """Validate a plugin directory.

    Exits 0 when every check passes, 1 when violations or warnings were
    reported, and 2 when the manifest could not be loaded.
    """
    settings: config.Settings = ctx.obj["settings"]
    report = pipeline.validate_plugin(root, settings)

    if _use_json(ctx, json_output):
        _click.echo(_json.dumps(report.to_dict(), indent=2))
    else:
        name = report.manifest.name if report.manifest is not None else None
        _click.echo(f"Plugin: {name or root}")
        _click.echo(f"  Path: {report.root}")
        _click.echo(_status_line(report))
        if report.components is not None:
            counts = report.components.counts()
            _click.echo(
                "  Components: "
                + ", ".join(f"{count} {kind}" for kind, count in counts.items())
            )
        _echo_problems(report)

    if report.exit_code != report_module.EXIT_OK:
        raise SystemExit(report.exit_code)


@cli.command(name="discover")
@_click.argument("root", type=_click.Path(path_type=_pathlib.Path))
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def discover(ctx: _click.Context, root: _pathlib.Path, json_output: bool) -> None:
    """List the components discovered in a plugin directory."""
    settings: config.Settings = ctx.obj["settings"]
    report = pipeline.validate_plugin(root, settings)

    if report.components is None:
        if _use_json(ctx, json_output):
            _click.echo(_json.dumps({"error": "Manifest is invalid", **report.to_dict()}, indent=2))
        else:
            _click.echo(f"Error: cannot discover components in {root}", err=True)
            for line in report.format_lines():
                _click.echo(f"  {line}", err=True)
        raise SystemExit(report.exit_code)

    components = report.components
    if _use_json(ctx, json_output):
        _click.echo(_json.dumps(components.to_dict(), indent=2))
        return

    _click.echo(f"{'Kind':<10} {'Name':<30} {'Origin':<10} {'Path'}")
    _click.echo("-" * 80)
    for component in components.files():
        _click.echo(
            f"{component.kind.value:<10} {component.name:<30} "
            f"{component.origin.value:<10} {component.relative_path}"
        )
    if components.hooks is not None and components.hooks.is_inline:
        _click.echo(f"{'hooks':<10} {'(inline)':<30} {'explicit':<10} -")
    if report.warnings:
        _click.echo()
        _echo_problems(report)


@cli.command(name="marketplace")
@_click.argument("path", type=_click.Path(path_type=_pathlib.Path))
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def marketplace(ctx: _click.Context, path: _pathlib.Path, json_output: bool) -> None:
    """Validate a marketplace.json file (or a directory containing one)."""
    settings: config.Settings = ctx.obj["settings"]
    report = pipeline.validate_marketplace(path, settings)

    if _use_json(ctx, json_output):
        _click.echo(_json.dumps(report.to_dict(), indent=2))
    else:
        name = report.marketplace.name if report.marketplace is not None else None
        _click.echo(f"Marketplace: {name or path}")
        _click.echo(_status_line(report))
        if report.marketplace is not None:
            _click.echo(f"  Plugins: {len(report.marketplace.plugins)}")
        _echo_problems(report)

    if report.exit_code != report_module.EXIT_OK:
        raise SystemExit(report.exit_code)


@cli.command(name="skill")
@_click.argument("path", type=_click.Path(path_type=_pathlib.Path))
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def skill(ctx: _click.Context, path: _pathlib.Path, json_output: bool) -> None:
    """Check a single SKILL.md (or a skill directory)."""
    settings: config.Settings = ctx.obj["settings"]
    skill_file = path / "SKILL.md" if path.is_dir() else path

    result: dict[str, _typing.Any] = {
        "path": str(skill_file),
        "valid": False,
        "name": None,
        "problems": [],
    }
    problems: list[errors.Violation] = []

    resolver = paths.PathResolver(
        skill_file.parent,
        check_permissions=settings.rules.check_permissions,
    )
    if not skill_file.is_file():
        problems.append(
            errors.warning(
                errors.ViolationCode.DANGLING_REFERENCE,
                "SKILL.md not found",
                str(skill_file),
            )
        )
    else:
        unreadable = resolver.check_readable(skill_file)
        if unreadable is not None:
            problems.append(unreadable)
        else:
            try:
                content = skill_file.read_text(encoding="utf-8")
                document = frontmatter.parse_skill_markdown(content)
                result["name"] = document.name
                style = frontmatter.check_description_style(
                    document.frontmatter_text, str(skill_file)
                )
                if style is not None:
                    problems.append(style)
            except UnicodeDecodeError as e:
                problems.append(
                    errors.warning(
                        errors.ViolationCode.UNREADABLE_FILE,
                        f"File is not valid UTF-8: {e}",
                        str(skill_file),
                    )
                )
            except ValueError as e:
                problems.append(
                    errors.warning(
                        errors.ViolationCode.INVALID_SKILL_FRONTMATTER,
                        str(e),
                        str(skill_file),
                    )
                )

    result["valid"] = not problems
    result["problems"] = [p.to_dict() for p in problems]

    if _use_json(ctx, json_output):
        _click.echo(_json.dumps(result, indent=2))
    else:
        _click.echo(f"Skill: {skill_file}")
        _click.echo("  Status: ✓ valid" if not problems else "  Status: ✗ invalid")
        if result["name"]:
            _click.echo(f"  Name: {result['name']}")
        for problem in problems:
            _click.echo(f"  {problem.format()}")

    if problems:
        raise SystemExit(report_module.EXIT_FAILED)


# =============================================================================
# Config Commands
# =============================================================================


@cli.command(name="config")
@_click.option("--json", "json_output", is_flag=True, help="JSON output")
@_click.pass_context
def show_config(ctx: _click.Context, json_output: bool) -> None:
    """Show the effective configuration."""
    settings: config.Settings = ctx.obj["settings"]
    data = settings.model_dump(mode="json")

    if json_output:
        _click.echo(_json.dumps(data, indent=2))
    else:
        _click.echo("Config files (lowest to highest precedence):")
        for config_path in config.get_config_files():
            exists = "✓" if config_path.exists() else "(not found)"
            _click.echo(f"  {config_path} {exists}")
        _click.echo()
        _click.echo(_yaml.safe_dump(data, sort_keys=False).rstrip())

    unknown = settings.get_unknown_keys()
    if unknown:
        _click.echo()
        _click.echo("Unknown config keys (possible typos):", err=True)
        for key in sorted(unknown):
            _click.echo(f"  {key}", err=True)


def main() -> None:
    """Main entry point with correct program name."""
    cli(prog_name="pluginlint")


if __name__ == "__main__":
    main()
