"""
Variant registry.

Closed, read-only table from variant to VariantRule. Lookups accept any
spelling of a variant name that normalizes to a registered one.
"""

import functools
import json
import logging
from dataclasses import replace
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping

from formgen.config import FormGenConfig, get_config
from formgen.exceptions import UnknownVariant
from formgen.models.field_definitions import FieldOption, FieldSpec, Variant, variant_key
from formgen.variants.controls import ControlContext
from formgen.variants.rules import VariantRule, build_rules

logger = logging.getLogger(__name__)

OptionCatalogs = Mapping[Any, Iterable[Any]]


def _to_options(items: Iterable[Any]) -> tuple[FieldOption, ...]:
    options = []
    for item in items:
        if isinstance(item, FieldOption):
            options.append(item)
        elif isinstance(item, str):
            options.append(FieldOption(label=item, value=item))
        else:
            options.append(FieldOption.model_validate(item))
    return tuple(options)


def _resolve_variant(name: Any) -> Variant:
    if isinstance(name, Variant):
        return name
    for variant in Variant:
        if variant_key(variant.value) == variant_key(name):
            return variant
    raise UnknownVariant(str(name))


class VariantRegistry:
    """Read-only mapping from variant to its rule."""

    def __init__(self, rules: Mapping[Variant, VariantRule], context: ControlContext):
        self._rules = MappingProxyType(dict(rules))
        self._by_key = MappingProxyType({variant_key(v.value): r for v, r in self._rules.items()})
        self.context = context

    def lookup(self, variant: str) -> VariantRule:
        """
        Find the rule for a variant name.

        Raises:
            UnknownVariant: If no registered variant matches the name.
        """
        rule = self._by_key.get(variant_key(variant))
        if rule is None:
            raise UnknownVariant(str(variant))
        return rule

    def rule_for(self, spec: FieldSpec) -> VariantRule:
        """Like lookup, with the field name attached to the error."""
        try:
            return self.lookup(spec.variant)
        except UnknownVariant as e:
            raise UnknownVariant(e.variant, field=spec.name) from None

    def context_for(self, spec: FieldSpec, rule: VariantRule | None = None) -> ControlContext:
        rule = rule or self.rule_for(spec)
        return replace(self.context, options=rule.options_for(spec))

    def __contains__(self, variant: object) -> bool:
        return isinstance(variant, str) and variant_key(variant) in self._by_key

    def __iter__(self) -> Iterator[VariantRule]:
        return iter(self._rules.values())

    def __len__(self) -> int:
        return len(self._rules)

    @property
    def rules(self) -> Mapping[Variant, VariantRule]:
        return self._rules

    def variants(self) -> list[Variant]:
        """Registered variants in declaration order."""
        return list(self._rules)

    def describe(self) -> list[dict[str, Any]]:
        """Documentation catalog: one entry per variant."""
        return [rule.describe() for rule in self._rules.values()]


def build_registry(
    catalogs: OptionCatalogs | None = None,
    config: FormGenConfig | None = None,
) -> VariantRegistry:
    """
    Build a registry.

    Args:
        catalogs: Option lists keyed by variant (name or Variant) that
            choice variants fall back to when a field has no options.
            Defaults to the configured Combobox catalog.
        config: Settings for limits and fallbacks. Defaults to the
            current configuration.
    """
    config = config or get_config()
    if catalogs is None:
        catalogs = {Variant.COMBOBOX: config.combobox_options}

    resolved = {_resolve_variant(name): _to_options(items) for name, items in catalogs.items()}
    rules = build_rules(config, resolved)
    for variant in resolved:
        if not rules[variant].needs_options:
            logger.warning(f"Option catalog for '{variant.value}' is ignored: variant takes no options")
        elif rules[variant].options_catalog != resolved[variant]:
            rules[variant] = replace(rules[variant], options_catalog=resolved[variant])

    context = ControlContext(
        default_phone_country=config.default_phone_country,
        earliest_date=config.earliest_date,
        file_max_count=config.file_max_count,
        file_max_size=config.file_max_size,
        otp_length=config.otp_default_length,
        slider_min=config.slider_min,
        slider_max=config.slider_max,
        slider_step=config.slider_step,
    )
    return VariantRegistry(rules, context)


# Settings that flow into the variant rules and the control context
_REGISTRY_SETTINGS = (
    "combobox_options",
    "default_phone_country",
    "earliest_date",
    "file_max_count",
    "file_max_size",
    "otp_default_length",
    "slider_min",
    "slider_max",
    "slider_step",
)


def _settings_key(config: FormGenConfig) -> str:
    return json.dumps([getattr(config, name) for name in _REGISTRY_SETTINGS], sort_keys=True, default=str)


@functools.lru_cache(maxsize=4)
def _cached_registry(settings_key: str) -> VariantRegistry:
    return build_registry()


def default_registry() -> VariantRegistry:
    """Registry built from the current configuration, cached per settings snapshot."""
    return _cached_registry(_settings_key(get_config()))
