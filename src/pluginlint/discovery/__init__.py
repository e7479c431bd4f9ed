"""
Plugin component discovery.

Commands and skills are found implicitly by globbing; agents and hooks
are taken explicitly from the manifest.
"""

from pluginlint.discovery.discoverer import (
    Component,
    ComponentDiscoverer,
    DiscoveredComponents,
    DiscoveryResult,
    HooksSource,
    resolve_relative,
)
from pluginlint.discovery.strategies import (
    DEFAULT_STRATEGIES,
    ComponentKind,
    DiscoveryStrategy,
    Explicit,
    Implicit,
    Origin,
    command_pattern,
)

__all__ = [
    "DEFAULT_STRATEGIES",
    "Component",
    "ComponentDiscoverer",
    "ComponentKind",
    "DiscoveredComponents",
    "DiscoveryResult",
    "DiscoveryStrategy",
    "Explicit",
    "HooksSource",
    "Implicit",
    "Origin",
    "command_pattern",
    "resolve_relative",
]
