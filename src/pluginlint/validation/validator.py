"""
Schema validation for plugin and marketplace manifests.

Validation is exhaustive: every rule runs against the raw manifest and
all violations are collected. Only a manifest with no violations is
turned into a typed model.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import typing as _typing

import pydantic as _pydantic

import pluginlint.config.types as config_types
import pluginlint.errors as errors
import pluginlint.manifest.models as models
import pluginlint.validation.rules as rules

_logger = _logging.getLogger(__name__)

_ModelT = _typing.TypeVar("_ModelT", bound=_pydantic.BaseModel)


@_dataclasses.dataclass
class ValidationOutcome(_typing.Generic[_ModelT]):
    """Either a validated manifest or the violations that prevent one."""

    violations: list[errors.Violation] = _dataclasses.field(default_factory=list)
    """Every violation found, in rule order."""

    manifest: _ModelT | None = None
    """Typed manifest; set only when there are no violations."""

    @property
    def valid(self) -> bool:
        """Whether the manifest passed every rule."""
        return not self.violations and self.manifest is not None


class SchemaValidator:
    """
    Runs manifest rules and builds typed manifests.

    Example:
        validator = SchemaValidator()
        outcome = validator.validate_plugin({"name": "my-plugin"})
        if outcome.valid:
            print(outcome.manifest.name)
    """

    def __init__(
        self,
        config: config_types.RulesConfig | None = None,
        *,
        plugin_rules: _typing.Sequence[rules.Rule] = rules.PLUGIN_RULES,
        marketplace_rules: _typing.Sequence[rules.Rule] = rules.MARKETPLACE_RULES,
    ) -> None:
        self._config = config or config_types.RulesConfig()
        self._plugin_rules = tuple(plugin_rules)
        self._marketplace_rules = tuple(marketplace_rules)

    def validate_plugin(
        self,
        data: _typing.Mapping[str, _typing.Any],
        source: str = "plugin.json",
    ) -> ValidationOutcome[models.PluginManifest]:
        """
        Validate a raw plugin.json object.

        Args:
            data: Parsed plugin.json content.
            source: Label used in violation locations.

        Returns:
            Outcome with all violations, or the typed PluginManifest.
        """
        return self._validate(data, source, self._plugin_rules, models.PluginManifest)

    def validate_marketplace(
        self,
        data: _typing.Mapping[str, _typing.Any],
        source: str = "marketplace.json",
    ) -> ValidationOutcome[models.MarketplaceManifest]:
        """
        Validate a raw marketplace.json object.

        Args:
            data: Parsed marketplace.json content.
            source: Label used in violation locations.

        Returns:
            Outcome with all violations, or the typed MarketplaceManifest.
        """
        return self._validate(
            data, source, self._marketplace_rules, models.MarketplaceManifest
        )

    def _validate(
        self,
        data: _typing.Mapping[str, _typing.Any],
        source: str,
        rule_set: tuple[rules.Rule, ...],
        model: type[_ModelT],
    ) -> ValidationOutcome[_ModelT]:
        ctx = rules.RuleContext(source=source, max_name_length=self._config.max_name_length)
        outcome: ValidationOutcome[_ModelT] = ValidationOutcome()

        for rule in rule_set:
            outcome.violations.extend(rule(data, ctx))

        if outcome.violations:
            _logger.debug("%s: %d violation(s)", source, len(outcome.violations))
            return outcome

        try:
            outcome.manifest = model.model_validate(dict(data))
        except _pydantic.ValidationError as e:
            # Custom rule sets may let schema errors through.
            for err in e.errors():
                field = ".".join(str(part) for part in err["loc"]) or "<root>"
                outcome.violations.append(
                    errors.Violation(
                        errors.ViolationCode.MALFORMED_MANIFEST,
                        err["msg"],
                        ctx.at(field),
                    )
                )

        return outcome
