"""
Field resolution shared by all synthesizers.

Walks a form definition, pairs each field with its variant rule and
turns tolerated input problems (unknown variants, duplicate names,
choice fields without options) into warnings.
"""

import logging
from dataclasses import dataclass, field

from formgen.exceptions import FormGenError, MalformedOptions, NameCollision, UnknownVariant
from formgen.models.field_definitions import FieldOption, FieldSpec, FormDefinition
from formgen.models.validation_result import SynthesisWarning
from formgen.variants.controls import ControlContext
from formgen.variants.registry import VariantRegistry
from formgen.variants.rules import VariantRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedField:
    """A field paired with its rule and the options it offers."""

    spec: FieldSpec
    rule: VariantRule
    context: ControlContext

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def options(self) -> tuple[FieldOption, ...]:
        return self.context.options

    @property
    def option_values(self) -> list[str]:
        return [option.value for option in self.context.options]


@dataclass
class Resolution:
    """Resolved fields keyed by name plus the warnings collected on the way."""

    fields: dict[str, ResolvedField] = field(default_factory=dict)
    rows: list[list[ResolvedField]] = field(default_factory=list)
    warnings: list[SynthesisWarning] = field(default_factory=list)

    def ordered(self) -> list[ResolvedField]:
        return list(self.fields.values())

    def warn(self, error: FormGenError) -> None:
        warning = SynthesisWarning.from_error(error)
        logger.warning(str(warning))
        self.warnings.append(warning)


def resolve_field(spec: FieldSpec, registry: VariantRegistry) -> ResolvedField:
    """
    Pair one field with its rule.

    Raises:
        UnknownVariant: If the field's variant is not registered.
    """
    rule = registry.rule_for(spec)
    return ResolvedField(spec=spec, rule=rule, context=registry.context_for(spec, rule))


def resolve_form(form: FormDefinition, registry: VariantRegistry) -> Resolution:
    """
    Resolve every field of a form.

    Unknown variants are skipped. When two fields share a name the later
    one replaces the earlier, keeping the earlier position. `rows` keeps
    the grouping of the surviving fields for layout; fields replaced by
    a later duplicate are dropped from their row.
    """
    resolution = Resolution()
    placed: list[list[ResolvedField]] = []

    for group in form.groups():
        row = []
        for spec in group:
            try:
                resolved = resolve_field(spec, registry)
            except UnknownVariant as e:
                resolution.warn(e)
                continue

            if resolved.rule.needs_options and not resolved.options:
                resolution.warn(
                    MalformedOptions(
                        f"'{resolved.rule.variant.value}' field has no options; every value will be rejected",
                        field=spec.name,
                    )
                )

            if spec.name in resolution.fields:
                resolution.warn(
                    NameCollision(
                        f"Duplicate field name '{spec.name}'; the later definition wins",
                        field=spec.name,
                    )
                )
            resolution.fields[spec.name] = resolved
            row.append(resolved)
        if row:
            placed.append(row)

    winners = {id(resolved) for resolved in resolution.fields.values()}
    for row in placed:
        kept = [resolved for resolved in row if id(resolved) in winners]
        if kept:
            resolution.rows.append(kept)
    return resolution
