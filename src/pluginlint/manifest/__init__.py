"""
Plugin and marketplace manifests.

- plugin.json: name plus component declarations (commands, agents, hooks)
- marketplace.json: an index of plugins with ownership metadata
"""

from pluginlint.manifest.loader import ManifestLoader, read_json_object
from pluginlint.manifest.models import (
    LoadedPlugin,
    ManifestFile,
    MarketplaceManifest,
    MarketplaceOwner,
    MarketplacePluginEntry,
    PluginManifest,
)

__all__ = [
    "LoadedPlugin",
    "ManifestFile",
    "ManifestLoader",
    "MarketplaceManifest",
    "MarketplaceOwner",
    "MarketplacePluginEntry",
    "PluginManifest",
    "read_json_object",
]
