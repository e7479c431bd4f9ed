"""
Manifest schema validation.

Rules are independent functions over the raw manifest; SchemaValidator
runs all of them and collects every violation.
"""

from pluginlint.validation.rules import (
    MARKETPLACE_RULES,
    PLUGIN_RULES,
    Rule,
    RuleContext,
    is_valid_plugin_name,
)
from pluginlint.validation.validator import SchemaValidator, ValidationOutcome

__all__ = [
    "MARKETPLACE_RULES",
    "PLUGIN_RULES",
    "Rule",
    "RuleContext",
    "SchemaValidator",
    "ValidationOutcome",
    "is_valid_plugin_name",
]
