"""
Manifest schema rules.

Each rule inspects the raw manifest dict independently and yields zero
or more violations. Rules never raise and never depend on one another,
so a single pass reports every problem in the manifest.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import re as _re
import typing as _typing

import pluginlint.constants as constants
import pluginlint.errors as errors

_NAME_RE = _re.compile(constants.PLUGIN_NAME_PATTERN)

Code = errors.ViolationCode


@_dataclasses.dataclass(frozen=True)
class RuleContext:
    """Inputs shared by every rule in one validation call."""

    source: str
    """Label of the manifest being checked (e.g. '.claude-plugin/plugin.json')."""

    max_name_length: int = constants.MAX_NAME_LENGTH
    """Maximum allowed name length."""

    def at(self, field: str) -> str:
        """Location label for a field of this manifest."""
        return f"{self.source}:{field}"


Rule = _typing.Callable[
    [_typing.Mapping[str, _typing.Any], RuleContext],
    _typing.Iterable[errors.Violation],
]


def is_valid_plugin_name(name: object, max_length: int = constants.MAX_NAME_LENGTH) -> bool:
    """Whether name is a kebab-case string of at most max_length characters."""
    return isinstance(name, str) and len(name) <= max_length and bool(_NAME_RE.match(name))


def _name_violation(
    value: object,
    field: str,
    ctx: RuleContext,
) -> errors.Violation | None:
    """Check a single name value; None when it's valid."""
    if is_valid_plugin_name(value, ctx.max_name_length):
        return None
    if not isinstance(value, str):
        message = f"Name must be a string, got {type(value).__name__}"
    elif len(value) > ctx.max_name_length:
        message = f"Name '{value}' is {len(value)} characters (max {ctx.max_name_length})"
    else:
        message = f"Name '{value}' must be kebab-case (lowercase letters, digits, single hyphens)"
    return errors.Violation(Code.INVALID_NAME, message, ctx.at(field))


def _path_violation(path: str, field: str, ctx: RuleContext) -> errors.Violation | None:
    """Check that a declared path is ./-prefixed and stays inside the root."""
    if not path.startswith(constants.PATH_PREFIX):
        return errors.Violation(
            Code.INVALID_PATH_PREFIX,
            f"Path '{path}' must start with '{constants.PATH_PREFIX}'",
            ctx.at(field),
        )
    if ".." in path.split("/"):
        return errors.Violation(
            Code.INVALID_PATH_PREFIX,
            f"Path '{path}' must stay inside the plugin root",
            ctx.at(field),
        )
    return None


# =============================================================================
# plugin.json rules
# =============================================================================


def check_name(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """`name` is required, kebab-case and within the length limit."""
    if "name" not in data:
        yield errors.Violation(Code.INVALID_NAME, "Missing required field 'name'", ctx.at("name"))
        return
    violation = _name_violation(data["name"], "name", ctx)
    if violation is not None:
        yield violation


def check_commands_type(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """`commands` is a directory string or a list of file path strings."""
    if "commands" not in data:
        return
    value = data["commands"]
    if isinstance(value, str):
        return
    if isinstance(value, list) and all(isinstance(item, str) for item in value):
        return
    got = "list with non-string entries" if isinstance(value, list) else _describe(value)
    yield errors.Violation(
        Code.INVALID_COMMANDS_TYPE,
        f"'commands' must be a directory path or a list of file paths, got {got}",
        ctx.at("commands"),
    )


def check_agent_paths(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """Every `agents` entry is a path ending in `.md`."""
    if "agents" not in data:
        return
    value = data["agents"]
    if not isinstance(value, list):
        yield errors.Violation(
            Code.INVALID_AGENT_PATH,
            f"'agents' must be a list of {constants.AGENT_SUFFIX} file paths, "
            f"got {_describe(value)}",
            ctx.at("agents"),
        )
        return
    for i, entry in enumerate(value):
        if not isinstance(entry, str):
            yield errors.Violation(
                Code.INVALID_AGENT_PATH,
                f"Agent path must be a string, got {_describe(entry)}",
                ctx.at(f"agents[{i}]"),
            )
        elif not entry.endswith(constants.AGENT_SUFFIX):
            yield errors.Violation(
                Code.INVALID_AGENT_PATH,
                f"Agent path '{entry}' must end with '{constants.AGENT_SUFFIX}'",
                ctx.at(f"agents[{i}]"),
            )


def check_hooks_type(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """`hooks` is a path string or an inline object."""
    if "hooks" not in data:
        return
    value = data["hooks"]
    if isinstance(value, (str, dict)):
        return
    yield errors.Violation(
        Code.INVALID_HOOKS_TYPE,
        f"'hooks' must be a file path or an inline object, got {_describe(value)}",
        ctx.at("hooks"),
    )


def check_no_skills_field(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """Skills are discovered from skills/*/SKILL.md and never declared."""
    if "skills" in data:
        yield errors.Violation(
            Code.UNEXPECTED_SKILLS_FIELD,
            "'skills' must not be declared; skills are discovered from skills/*/SKILL.md",
            ctx.at("skills"),
        )


def check_path_prefixes(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """Every declared path begins with `./`."""
    for field, path in _declared_paths(data):
        violation = _path_violation(path, field, ctx)
        if violation is not None:
            yield violation


def _declared_paths(
    data: _typing.Mapping[str, _typing.Any],
) -> _typing.Iterator[tuple[str, str]]:
    """Yield (field label, path) for every string path in the manifest."""
    commands = data.get("commands")
    if isinstance(commands, str):
        yield "commands", commands
    elif isinstance(commands, list):
        for i, item in enumerate(commands):
            if isinstance(item, str):
                yield f"commands[{i}]", item

    agents = data.get("agents")
    if isinstance(agents, list):
        for i, item in enumerate(agents):
            if isinstance(item, str):
                yield f"agents[{i}]", item

    hooks = data.get("hooks")
    if isinstance(hooks, str):
        yield "hooks", hooks


PLUGIN_RULES: tuple[Rule, ...] = (
    check_name,
    check_commands_type,
    check_agent_paths,
    check_hooks_type,
    check_no_skills_field,
    check_path_prefixes,
)
"""Rules applied to plugin.json, in reporting order."""


# =============================================================================
# marketplace.json rules
# =============================================================================


def check_marketplace_name(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """Marketplace `name` is a kebab-case identifier."""
    yield from check_name(data, ctx)


def check_owner(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """`owner` is a record with non-empty `name` and `email`."""
    owner = data.get("owner")
    if not isinstance(owner, dict):
        yield errors.Violation(
            Code.MISSING_OWNER_FIELD,
            "'owner' must be an object with 'name' and 'email'",
            ctx.at("owner"),
        )
        return
    for field in ("name", "email"):
        if not _non_empty_str(owner.get(field)):
            yield errors.Violation(
                Code.MISSING_OWNER_FIELD,
                f"Owner is missing required field '{field}'",
                ctx.at(f"owner.{field}"),
            )


def check_plugin_entries(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """Every plugin entry has a valid `name` and a usable `source`."""
    plugins = data.get("plugins")
    if not isinstance(plugins, list):
        yield errors.Violation(
            Code.MISSING_PLUGIN_FIELD,
            f"'plugins' must be a list of plugin entries, got {_describe(plugins)}",
            ctx.at("plugins"),
        )
        return

    for i, entry in enumerate(plugins):
        prefix = f"plugins[{i}]"
        if not isinstance(entry, dict):
            yield errors.Violation(
                Code.MISSING_PLUGIN_FIELD,
                f"Plugin entry must be an object, got {_describe(entry)}",
                ctx.at(prefix),
            )
            continue

        name = entry.get("name")
        if not _non_empty_str(name):
            yield errors.Violation(
                Code.MISSING_PLUGIN_FIELD,
                "Plugin entry is missing required field 'name'",
                ctx.at(f"{prefix}.name"),
            )
        else:
            violation = _name_violation(name, f"{prefix}.name", ctx)
            if violation is not None:
                yield violation

        source = entry.get("source")
        if isinstance(source, dict) and source:
            continue
        if not _non_empty_str(source):
            yield errors.Violation(
                Code.MISSING_PLUGIN_FIELD,
                "Plugin entry is missing required field 'source'",
                ctx.at(f"{prefix}.source"),
            )
            continue
        violation = _path_violation(source, f"{prefix}.source", ctx)
        if violation is not None:
            yield violation


def check_unique_plugin_names(
    data: _typing.Mapping[str, _typing.Any], ctx: RuleContext
) -> _typing.Iterator[errors.Violation]:
    """Plugin names are unique within a marketplace."""
    plugins = data.get("plugins")
    if not isinstance(plugins, list):
        return
    seen: dict[str, int] = {}
    for i, entry in enumerate(plugins):
        if not isinstance(entry, dict) or not _non_empty_str(entry.get("name")):
            continue
        name = entry["name"]
        if name in seen:
            yield errors.Violation(
                Code.DUPLICATE_PLUGIN_NAME,
                f"Plugin '{name}' is already listed at plugins[{seen[name]}]",
                ctx.at(f"plugins[{i}].name"),
            )
        else:
            seen[name] = i


MARKETPLACE_RULES: tuple[Rule, ...] = (
    check_marketplace_name,
    check_owner,
    check_plugin_entries,
    check_unique_plugin_names,
)
"""Rules applied to marketplace.json, in reporting order."""


def _non_empty_str(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _describe(value: object) -> str:
    """Short JSON-flavored type name for messages."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "list"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__
