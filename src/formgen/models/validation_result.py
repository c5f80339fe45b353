"""
Validation result models.

ValidationResult is produced when form data is checked against a
synthesized schema. SynthesisWarning records the non-fatal input
problems found while compiling a form definition.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from formgen.exceptions import FormGenError, MalformedOptions, NameCollision, UnknownVariant


class FieldValidationError(BaseModel):
    """Validation error for a specific field."""

    field_name: str = Field(..., description="Name of the field with error")
    error_type: str = Field(..., description="Type of validation error")
    message: str = Field(..., description="Human-readable error message")
    expected: Any | None = Field(default=None, description="Expected value/format")
    received: Any | None = Field(default=None, description="Received value")


class ValidationResult(BaseModel):
    """Result of form validation."""

    is_valid: bool = Field(..., description="Whether the form data is valid")
    errors: list[FieldValidationError] = Field(
        default_factory=list, description="List of validation errors"
    )
    validated_data: dict[str, Any] | None = Field(
        default=None, description="Cleaned/validated data if valid"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Non-blocking warnings"
    )

    @property
    def error_count(self) -> int:
        """Get the number of validation errors."""
        return len(self.errors)

    def get_field_errors(self, field_name: str) -> list[FieldValidationError]:
        """Get all errors for a specific field."""
        return [e for e in self.errors if e.field_name == field_name]

    def to_error_dict(self) -> dict[str, list[str]]:
        """Convert errors to a dict mapping field names to error messages."""
        result: dict[str, list[str]] = {}
        for error in self.errors:
            if error.field_name not in result:
                result[error.field_name] = []
            result[error.field_name].append(error.message)
        return result

    @classmethod
    def from_pydantic_error(cls, error: PydanticValidationError) -> "ValidationResult":
        """Build a failed result from a pydantic ValidationError."""
        errors = []
        for item in error.errors(include_url=False):
            loc = item.get("loc") or ("_form",)
            errors.append(
                FieldValidationError(
                    field_name=str(loc[0]),
                    error_type=item.get("type", "value_error"),
                    message=item.get("msg", "Invalid value"),
                    expected=(item.get("ctx") or {}).get("expected"),
                    received=item.get("input"),
                )
            )
        return cls(is_valid=False, errors=errors)


class WarningKind(str, Enum):
    """Kinds of non-fatal problems found in a form definition."""

    UNKNOWN_VARIANT = "unknown_variant"
    NAME_COLLISION = "name_collision"
    MALFORMED_OPTIONS = "malformed_options"
    INVALID_NAME = "invalid_name"
    GROUP_SIZE = "group_size"
    SUSPICIOUS_CONTENT = "suspicious_content"


_KIND_BY_EXCEPTION = {
    UnknownVariant: WarningKind.UNKNOWN_VARIANT,
    NameCollision: WarningKind.NAME_COLLISION,
    MalformedOptions: WarningKind.MALFORMED_OPTIONS,
}


class SynthesisWarning(BaseModel):
    """A non-fatal problem with one field of a form definition."""

    kind: WarningKind = Field(..., description="Problem category")
    field_name: str | None = Field(default=None, description="Affected field, if any")
    message: str = Field(..., description="Human-readable description")

    @classmethod
    def from_error(cls, error: FormGenError) -> "SynthesisWarning":
        """Record a tolerated exception as a warning."""
        kind = next(
            (k for exc_type, k in _KIND_BY_EXCEPTION.items() if isinstance(error, exc_type)),
            WarningKind.SUSPICIOUS_CONTENT,
        )
        return cls(kind=kind, field_name=error.field, message=error.message)

    def __str__(self) -> str:
        if self.field_name:
            return f"[{self.kind.value}] {self.field_name}: {self.message}"
        return f"[{self.kind.value}] {self.message}"
