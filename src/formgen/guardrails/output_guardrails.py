"""
Output guardrails for formgen.

These guardrails validate the synthesized artifacts before they are
returned to the user.
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field

from formgen.guardrails.constants import VALID_JSON_TYPES
from formgen.models.schema_output import ValidationSchema

# Keys that give a property a type without a "type" entry
_TYPED_KEYS = ("type", "anyOf", "oneOf", "allOf", "$ref", "enum", "const")


class SchemaValidationResult(BaseModel):
    """Result of schema format validation."""

    is_valid: bool = Field(..., description="Whether the schema is valid")
    errors: list[str] = Field(
        default_factory=list, description="List of validation errors"
    )
    warnings: list[str] = Field(
        default_factory=list, description="List of warnings"
    )


def check_schema_format(schema: dict[str, Any]) -> SchemaValidationResult:
    """Validate a JSON Schema structure."""
    errors = []
    warnings = []

    # Check required fields
    if "type" not in schema:
        errors.append("Missing 'type' field in schema")
    elif schema["type"] != "object":
        errors.append("Root schema type must be 'object'")

    if "properties" not in schema:
        errors.append("Missing 'properties' field in schema")
    elif not isinstance(schema["properties"], dict):
        errors.append("'properties' must be an object")
    elif len(schema["properties"]) == 0:
        warnings.append("Schema has no properties defined")

    # Validate properties
    if "properties" in schema and isinstance(schema["properties"], dict):
        for prop_name, prop_def in schema["properties"].items():
            if not isinstance(prop_def, dict):
                errors.append(f"Property '{prop_name}' must be an object")
                continue

            if not any(key in prop_def for key in _TYPED_KEYS):
                warnings.append(f"Property '{prop_name}' has no type defined")

            if "type" in prop_def:
                prop_type = prop_def["type"]
                if isinstance(prop_type, str) and prop_type not in VALID_JSON_TYPES:
                    errors.append(f"Property '{prop_name}' has invalid type: {prop_type}")
                elif isinstance(prop_type, list):
                    for t in prop_type:
                        if t not in VALID_JSON_TYPES:
                            errors.append(f"Property '{prop_name}' has invalid type in array: {t}")

    # Validate required array
    if "required" in schema:
        if not isinstance(schema["required"], list):
            errors.append("'required' must be an array")
        else:
            properties = schema.get("properties", {})
            for req_field in schema["required"]:
                if req_field not in properties:
                    errors.append(f"Required field '{req_field}' not in properties")

    return SchemaValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def check_default_coverage(schema: ValidationSchema, defaults: Mapping[str, Any]) -> SchemaValidationResult:
    """Defaults must have exactly the schema's keys."""
    errors = []
    schema_keys = set(schema.field_names)
    for name in schema.field_names:
        if name not in defaults:
            errors.append(f"Field '{name}' has no default value")
    for name in defaults:
        if name not in schema_keys:
            errors.append(f"Default '{name}' has no schema field")
    return SchemaValidationResult(is_valid=len(errors) == 0, errors=errors)


def check_artifacts(schema: ValidationSchema, defaults: Mapping[str, Any]) -> SchemaValidationResult:
    """
    Validate the synthesized schema and defaults together.

    Ensures the output:
    1. Has valid JSON Schema structure
    2. Has a default for every schema field and no others
    3. Has a UI Schema entry only for schema fields
    """
    format_result = check_schema_format(schema.to_json_schema())
    coverage_result = check_default_coverage(schema, defaults)

    ui_schema_warnings = []
    field_names = set(schema.field_names)
    for field_name in schema.to_ui_schema():
        if not field_name.startswith("ui:") and field_name not in field_names:
            ui_schema_warnings.append(f"UI Schema has field '{field_name}' not in fields")

    errors = format_result.errors + coverage_result.errors
    return SchemaValidationResult(
        is_valid=len(errors) == 0,
        errors=errors,
        warnings=format_result.warnings + ui_schema_warnings,
    )
