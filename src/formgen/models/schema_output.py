"""
Synthesized schema output models.

ValidationSchema wraps the pydantic model class built by the Schema
Synthesizer. It validates submitted data and exports JSON Schema / UI
Schema dicts that client-side form libraries can consume.
"""

from typing import Any, Mapping

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from formgen.models.validation_result import SynthesisWarning, ValidationResult


class SchemaEntry(BaseModel):
    """One field as it appears in a synthesized schema."""

    name: str = Field(..., description="Field name/key")
    variant: str = Field(..., description="Registered variant name")
    title: str = Field(default="", description="Human-readable label")
    required: bool = Field(default=False, description="Whether field is required")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    zod: str = Field(default="", description="Equivalent zod expression")


class ValidationSchema:
    """
    Keyed validator for a whole form.

    Built once per form definition; `validate` may be called any number
    of times. Keys are the field names, in first-declaration order.
    """

    def __init__(
        self,
        model: type[BaseModel],
        entries: list[SchemaEntry],
        warnings: list[SynthesisWarning] | None = None,
    ):
        self.model = model
        self.entries = entries
        self.warnings = list(warnings or [])

    @property
    def field_names(self) -> list[str]:
        return [entry.name for entry in self.entries]

    def __contains__(self, name: object) -> bool:
        return name in self.field_names

    def __len__(self) -> int:
        return len(self.entries)

    def entry(self, name: str) -> SchemaEntry:
        for entry in self.entries:
            if entry.name == name:
                return entry
        raise KeyError(name)

    def validate(self, data: Mapping[str, Any]) -> ValidationResult:
        """
        Validate submitted form data.

        Keys that are not in the schema are ignored. On success the
        result carries the cleaned data keyed by field name.
        """
        try:
            instance = self.model.model_validate(dict(data))
        except PydanticValidationError as e:
            result = ValidationResult.from_pydantic_error(e)
        else:
            result = ValidationResult(
                is_valid=True,
                validated_data=instance.model_dump(by_alias=True),
            )
        result.warnings = [str(w) for w in self.warnings]
        return result

    def is_valid(self, data: Mapping[str, Any]) -> bool:
        return self.validate(data).is_valid

    def to_json_schema(self) -> dict[str, Any]:
        """Export as JSON Schema dict."""
        schema = self.model.model_json_schema(by_alias=True)
        return {
            "$schema": "https://json-schema.org/draft/2020-12/schema",
            **schema,
        }

    def to_ui_schema(self) -> dict[str, Any]:
        """Export as UI Schema dict."""
        ui_schema: dict[str, Any] = {"ui:order": self.field_names}
        for entry in self.entries:
            field_ui: dict[str, Any] = {"ui:widget": entry.variant}
            if entry.placeholder:
                field_ui["ui:placeholder"] = entry.placeholder
            ui_schema[entry.name] = field_ui
        return ui_schema

    def __repr__(self) -> str:
        return f"ValidationSchema(fields={self.field_names!r})"
