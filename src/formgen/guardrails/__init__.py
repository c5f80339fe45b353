"""
Guardrails for formgen.

Safety checks on form definitions and on the synthesized artifacts.
"""

from formgen.guardrails.input_guardrails import (
    DefinitionCheckResult,
    check_field_name,
    check_for_injection,
    inspect_form,
)
from formgen.guardrails.output_guardrails import (
    SchemaValidationResult,
    check_artifacts,
    check_default_coverage,
    check_schema_format,
)

__all__ = [
    "DefinitionCheckResult",
    "SchemaValidationResult",
    "check_artifacts",
    "check_default_coverage",
    "check_field_name",
    "check_for_injection",
    "check_schema_format",
    "inspect_form",
]
