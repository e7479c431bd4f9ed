"""
Path resolution, hook placeholder expansion, and SKILL.md checks.
"""

from pluginlint.resolver.frontmatter import (
    SkillDocument,
    SkillFrontmatter,
    check_description_style,
    description_style,
    parse_skill_markdown,
    split_frontmatter,
)
from pluginlint.resolver.hooks import (
    HookCommand,
    HookMatcher,
    HooksFile,
    ResolvedHookCommand,
    expand_plugin_root,
    load_hooks_file,
    parse_hooks,
    referenced_plugin_files,
    resolve_hook_commands,
)
from pluginlint.resolver.paths import PathResolver

__all__ = [
    "HookCommand",
    "HookMatcher",
    "HooksFile",
    "PathResolver",
    "ResolvedHookCommand",
    "SkillDocument",
    "SkillFrontmatter",
    "check_description_style",
    "description_style",
    "expand_plugin_root",
    "load_hooks_file",
    "parse_hooks",
    "parse_skill_markdown",
    "referenced_plugin_files",
    "resolve_hook_commands",
    "split_frontmatter",
]
