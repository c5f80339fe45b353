"""
Preview renderer.

Lays out live controls in rows the way the emitted component does, seeds
preview state from the synthesized defaults, and validates the bound
values on submit.
"""

from dataclasses import dataclass, field
from typing import Any

from formgen.models.field_definitions import FormDefinition, column_span, load_form_definition
from formgen.models.state import StateBag
from formgen.models.validation_result import ValidationResult
from formgen.preview.dispatcher import ControlDescription, control_for_resolved
from formgen.synthesis.defaults import defaults_from_resolution
from formgen.synthesis.resolve import resolve_form
from formgen.synthesis.schema import schema_from_resolution
from formgen.variants.registry import VariantRegistry, default_registry


@dataclass
class PreviewRow:
    """One rendered row; `span` is each control's share of 12 columns."""

    span: int
    controls: list[ControlDescription] = field(default_factory=list)


def seed_state_bag(form: Any, registry: VariantRegistry | None = None) -> StateBag:
    """New StateBag whose values and field states start at the form defaults."""
    registry = registry or default_registry()
    resolution = resolve_form(load_form_definition(form), registry)
    defaults = defaults_from_resolution(resolution)

    state_bag = StateBag(values=defaults)
    for name, resolved in resolution.fields.items():
        resolved.rule.control.seed(state_bag.state_for(name), defaults[name])
    return state_bag


def render_preview(
    form: FormDefinition,
    state_bag: StateBag,
    registry: VariantRegistry | None = None,
) -> list[PreviewRow]:
    """Controls for every surviving field, grouped in rows as the emitted component lays them out."""
    registry = registry or default_registry()
    resolution = resolve_form(load_form_definition(form), registry)
    rows = []
    for row in resolution.rows:
        controls = [control_for_resolved(resolved, state_bag) for resolved in row]
        rows.append(PreviewRow(span=column_span(len(controls)), controls=controls))
    return rows


def submit_preview(
    form: FormDefinition,
    state_bag: StateBag,
    registry: VariantRegistry | None = None,
) -> ValidationResult:
    """Validate the values bound in `state_bag` against the form schema."""
    registry = registry or default_registry()
    schema = schema_from_resolution(resolve_form(load_form_definition(form), registry))
    return schema.validate(state_bag.values)
