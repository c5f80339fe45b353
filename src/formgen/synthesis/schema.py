"""
Schema Synthesizer.

Builds a pydantic model class from a form definition: one model field
per surviving form field, aliased to the field name.
"""

from pydantic import ConfigDict, Field, create_model

from formgen.models.field_definitions import FormDefinition
from formgen.models.schema_output import SchemaEntry, ValidationSchema
from formgen.synthesis.resolve import Resolution, ResolvedField, resolve_form
from formgen.variants.registry import VariantRegistry, default_registry

SCHEMA_MODEL_NAME = "FormSchema"


def zod_expression(resolved: ResolvedField) -> str:
    """zod source equivalent to the field's pydantic validator."""
    return resolved.rule.validator.zod(resolved.spec, resolved.option_values)


def schema_from_resolution(resolution: Resolution) -> ValidationSchema:
    definitions = {}
    entries = []
    for index, resolved in enumerate(resolution.ordered()):
        spec = resolved.spec
        annotation, kwargs = resolved.rule.validator.python_field(spec, resolved.option_values)
        # Internal attribute names avoid clashes with BaseModel members
        definitions[f"f_{index}"] = (
            annotation,
            Field(
                alias=spec.name,
                title=spec.label or spec.name,
                description=spec.description,
                **kwargs,
            ),
        )
        entries.append(
            SchemaEntry(
                name=spec.name,
                variant=resolved.rule.variant.value,
                title=spec.label or spec.name,
                required=spec.required,
                placeholder=spec.placeholder,
                zod=zod_expression(resolved),
            )
        )

    model = create_model(
        SCHEMA_MODEL_NAME,
        __config__=ConfigDict(extra="ignore", populate_by_name=False),
        **definitions,
    )
    return ValidationSchema(model, entries, warnings=resolution.warnings)


def synthesize_schema(form: FormDefinition, registry: VariantRegistry | None = None) -> ValidationSchema:
    """Build the validation schema of a form."""
    registry = registry or default_registry()
    return schema_from_resolution(resolve_form(form, registry))
