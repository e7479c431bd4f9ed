"""
pluginlint - plugin manifest discovery and validation.

Loads a plugin's plugin.json (and an optional marketplace.json),
validates it, discovers its commands, skills, agents and hooks, and
checks every referenced file on disk.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("pluginlint")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "pluginlint Contributors"

from pluginlint.config import Settings  # noqa: E402
from pluginlint.pipeline import validate_marketplace, validate_plugin  # noqa: E402
from pluginlint.report import ValidationReport  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "Settings",
    "ValidationReport",
    "validate_marketplace",
    "validate_plugin",
]
