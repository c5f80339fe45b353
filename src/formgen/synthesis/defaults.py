"""
Default Value Synthesizer.

Produces the initial value of every field, keyed by field name. The key
set always equals the schema's key set.
"""

from typing import Any

from formgen.models.field_definitions import FormDefinition
from formgen.synthesis.resolve import Resolution, resolve_form
from formgen.variants.registry import VariantRegistry, default_registry


def defaults_from_resolution(resolution: Resolution) -> dict[str, Any]:
    return {
        name: resolved.rule.default(resolved.spec, resolved.context)
        for name, resolved in resolution.fields.items()
    }


def synthesize_defaults(form: FormDefinition, registry: VariantRegistry | None = None) -> dict[str, Any]:
    """Build the default values of a form."""
    registry = registry or default_registry()
    return defaults_from_resolution(resolve_form(form, registry))
