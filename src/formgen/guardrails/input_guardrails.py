"""
Input guardrails for formgen.

These guardrails inspect a form definition before it is compiled. They
never stop compilation: problems are reported as issues and warnings.
"""

import re
from typing import Iterable

from pydantic import BaseModel, Field

from formgen.config import get_config
from formgen.guardrails.constants import (
    MAX_FIELD_NAME_LENGTH,
    MAX_GROUP_SIZE,
    SUSPICIOUS_PATTERNS,
    VALID_FIELD_NAME,
)
from formgen.models.field_definitions import FieldSpec, FormDefinition
from formgen.models.validation_result import SynthesisWarning, WarningKind
from formgen.synthesis.resolve import resolve_form
from formgen.variants.registry import VariantRegistry, default_registry


class DefinitionCheckResult(BaseModel):
    """Result of inspecting a form definition."""

    is_safe: bool = Field(..., description="Whether the definition is safe to emit")
    issues: list[str] = Field(default_factory=list, description="Any issues found")
    warnings: list[SynthesisWarning] = Field(
        default_factory=list, description="Non-blocking problems, per field"
    )


def check_field_name(name: str) -> tuple[bool, str | None]:
    """Validate a field name."""
    if not name:
        return False, "Field name cannot be empty"
    if len(name) > MAX_FIELD_NAME_LENGTH:
        return False, "Field name too long"
    if not VALID_FIELD_NAME.match(name):
        return False, "Invalid characters in field name"
    return True, None


def check_for_injection(text: str) -> bool:
    """Check for potential injection patterns."""
    for pattern in SUSPICIOUS_PATTERNS:
        if re.search(pattern, text, re.IGNORECASE):
            return False
    return True


def is_suspicious_field(name: str) -> bool:
    """
    Identify field names that look suspicious but may pass regex.

    Heuristics:
    - Too short or too long
    - Multiple consecutive underscores or trailing underscore
    - Looks like mostly digits
    """
    if len(name) < 2 or len(name) > 80:
        return True
    if "__" in name or name.endswith("_"):
        return True
    if sum(ch.isdigit() for ch in name) > (len(name) * 0.6):
        return True
    return False


def _display_texts(spec: FieldSpec) -> Iterable[str]:
    for text in (spec.label, spec.placeholder, spec.description):
        if text:
            yield text
    for option in spec.options or []:
        yield option.label
        yield option.value


def inspect_form(form: FormDefinition, registry: VariantRegistry | None = None) -> DefinitionCheckResult:
    """
    Inspect a form definition.

    Checks for:
    1. Unknown variants, duplicate names and choice fields without options
    2. Field names that are not valid identifiers
    3. Injection patterns in labels, placeholders, descriptions and options
    4. Rows wider than the grid comfortably holds
    """
    config = get_config()
    registry = registry or default_registry()

    warnings = list(resolve_form(form, registry).warnings)
    issues = []

    for spec in form.flatten():
        if config.enable_field_name_validation:
            is_valid, error = check_field_name(spec.name)
            if not is_valid:
                issues.append(f"Invalid field name '{spec.name}': {error}")
                warnings.append(
                    SynthesisWarning(kind=WarningKind.INVALID_NAME, field_name=spec.name, message=error)
                )
            elif is_suspicious_field(spec.name):
                warnings.append(
                    SynthesisWarning(
                        kind=WarningKind.INVALID_NAME,
                        field_name=spec.name,
                        message="Field name looks suspicious",
                    )
                )

        if config.enable_injection_check:
            if not all(check_for_injection(text) for text in _display_texts(spec)):
                issues.append(f"Potentially unsafe content in field '{spec.name}'")
                warnings.append(
                    SynthesisWarning(
                        kind=WarningKind.SUSPICIOUS_CONTENT,
                        field_name=spec.name,
                        message="Potentially unsafe content detected",
                    )
                )

    for group in form.groups():
        if len(group) > MAX_GROUP_SIZE:
            warnings.append(
                SynthesisWarning(
                    kind=WarningKind.GROUP_SIZE,
                    field_name=group[0].name,
                    message=f"Row of {len(group)} fields exceeds {MAX_GROUP_SIZE}",
                )
            )

    return DefinitionCheckResult(is_safe=len(issues) == 0, issues=issues, warnings=warnings)
