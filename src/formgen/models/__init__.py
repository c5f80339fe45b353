"""
Data models for formgen.

This module contains Pydantic models for:
- Form definitions (fields, groups, options)
- Synthesized validation schemas
- Validation results and synthesis warnings
- Live-preview field state
"""

from formgen.models.field_definitions import (
    FieldGroup,
    FieldOption,
    FieldSpec,
    FormDefinition,
    UploadedFile,
    Variant,
    column_span,
    load_form_definition,
    variant_for_editor_type,
    variant_key,
)
from formgen.models.schema_output import (
    SchemaEntry,
    ValidationSchema,
)
from formgen.models.state import (
    FieldState,
    SignaturePad,
    StateBag,
)
from formgen.models.validation_result import (
    FieldValidationError,
    SynthesisWarning,
    ValidationResult,
    WarningKind,
)

__all__ = [
    # Form definitions
    "FieldGroup",
    "FieldOption",
    "FieldSpec",
    "FormDefinition",
    "UploadedFile",
    "Variant",
    "column_span",
    "load_form_definition",
    "variant_for_editor_type",
    "variant_key",
    # Schema output
    "SchemaEntry",
    "ValidationSchema",
    # Preview state
    "FieldState",
    "SignaturePad",
    "StateBag",
    # Validation
    "FieldValidationError",
    "SynthesisWarning",
    "ValidationResult",
    "WarningKind",
]
