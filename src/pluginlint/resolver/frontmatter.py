"""
SKILL.md frontmatter parsing and style checks.

Skills carry a YAML frontmatter block with at least `name` and
`description`. A multi-line description must use block-literal style
(`description: |`); plain, quoted and folded multi-line scalars are
rejected because downstream tooling only parses literal blocks reliably.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import re as _re

import pydantic as _pydantic
import yaml as _yaml

import pluginlint.errors as errors

# Regex to extract YAML frontmatter from markdown
_FRONTMATTER_RE = _re.compile(
    r"^---\s*\n(.*?)\n---\s*\n?(.*)$",
    _re.DOTALL,
)

_STYLE_NAMES: dict[str | None, str] = {
    None: "plain",
    ">": "folded",
    '"': "double-quoted",
    "'": "single-quoted",
    "|": "block-literal",
}


class SkillFrontmatter(_pydantic.BaseModel):
    """
    Frontmatter parsed from a SKILL.md file.

    Required fields:
    - name: Skill identifier
    - description: What the skill does and when to use it
    """

    model_config = _pydantic.ConfigDict(extra="allow")

    name: str = _pydantic.Field(..., min_length=1)

    description: str = _pydantic.Field(..., min_length=1)


@_dataclasses.dataclass
class SkillDocument:
    """A SKILL.md file split into its parts."""

    frontmatter: SkillFrontmatter
    """Parsed frontmatter metadata."""

    frontmatter_text: str
    """Raw YAML between the --- fences."""

    body: str
    """Markdown body after the frontmatter."""

    @property
    def name(self) -> str:
        """Skill name from frontmatter."""
        return self.frontmatter.name


def split_frontmatter(content: str) -> tuple[str, str]:
    """
    Split markdown into (frontmatter YAML, body).

    Raises:
        ValueError: If there is no --- fenced frontmatter block.
    """
    match = _FRONTMATTER_RE.match(content)
    if not match:
        raise ValueError("SKILL.md must have YAML frontmatter (---)")
    return match.group(1), match.group(2).strip()


def parse_skill_markdown(content: str) -> SkillDocument:
    """
    Parse a SKILL.md file into frontmatter and body.

    Args:
        content: Raw markdown content.

    Returns:
        Parsed SkillDocument.

    Raises:
        ValueError: If frontmatter is missing, invalid YAML, or lacks
            a required field.
    """
    frontmatter_yaml, body = split_frontmatter(content)

    try:
        data = _yaml.safe_load(frontmatter_yaml) or {}
    except _yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in frontmatter: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Frontmatter must be a YAML mapping")

    try:
        frontmatter = SkillFrontmatter.model_validate(data)
    except _pydantic.ValidationError as e:
        missing = sorted(
            str(err["loc"][0]) for err in e.errors() if err["loc"]
        )
        raise ValueError(
            f"Invalid skill frontmatter (check: {', '.join(missing) or 'fields'})"
        ) from e

    return SkillDocument(
        frontmatter=frontmatter,
        frontmatter_text=frontmatter_yaml,
        body=body,
    )


def _find_key(
    root: _yaml.Node, key: str
) -> tuple[_yaml.ScalarNode, _yaml.Node] | None:
    """Find (key node, value node) for a top-level mapping key."""
    if not isinstance(root, _yaml.MappingNode):
        return None
    for key_node, value_node in root.value:
        if isinstance(key_node, _yaml.ScalarNode) and key_node.value == key:
            return key_node, value_node
    return None


def description_style(frontmatter_text: str) -> tuple[str, bool] | None:
    """
    Inspect how the `description` scalar is written.

    Args:
        frontmatter_text: Raw YAML frontmatter.

    Returns:
        (style name, is multi-line), or None if there is no scalar
        description.

    Raises:
        ValueError: If the YAML cannot be composed.
    """
    try:
        root = _yaml.compose(frontmatter_text, Loader=_yaml.SafeLoader)
    except _yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in frontmatter: {e}") from e

    if root is None:
        return None
    found = _find_key(root, "description")
    if found is None:
        return None
    key_node, value_node = found
    if not isinstance(value_node, _yaml.ScalarNode):
        return None

    multi_line = (
        value_node.start_mark.line != key_node.start_mark.line
        or value_node.end_mark.line != value_node.start_mark.line
    )
    return _STYLE_NAMES.get(value_node.style, str(value_node.style)), multi_line


def check_description_style(
    frontmatter_text: str,
    location: str | None = None,
) -> errors.Violation | None:
    """
    Check that a multi-line description uses block-literal style.

    Args:
        frontmatter_text: Raw YAML frontmatter.
        location: Location label for the violation.

    Returns:
        An InvalidDescriptionStyle warning, or None when the style is fine.
    """
    try:
        result = description_style(frontmatter_text)
    except ValueError:
        # Unparseable frontmatter is reported by discovery.
        return None

    if result is None:
        return None
    style, multi_line = result
    if style == "block-literal" or not multi_line:
        return None

    return errors.warning(
        errors.ViolationCode.INVALID_DESCRIPTION_STYLE,
        f"Multi-line description uses {style} style; use a block literal "
        f"('description: |')",
        location,
    )

