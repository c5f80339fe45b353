"""
Field definition models for the form compiler.

A form definition is an ordered list of field groups. Each group is
either a single FieldSpec or a row of FieldSpecs rendered side by side.
Grouping only changes layout; every synthesizer flattens the groups
before looking at the fields.
"""

import json
from enum import Enum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from formgen.exceptions import InvalidFormDefinition


class Variant(str, Enum):
    """Declared kind of a field."""

    INPUT = "Input"
    TEXTAREA = "Textarea"
    CHECKBOX = "Checkbox"
    SWITCH = "Switch"
    SELECT = "Select"
    MULTI_SELECT = "Multi Select"
    COMBOBOX = "Combobox"
    DATE_PICKER = "Date Picker"
    DATETIME_PICKER = "Datetime Picker"
    SMART_DATETIME_INPUT = "Smart Datetime Input"
    FILE_INPUT = "File Input"
    PASSWORD = "Password"
    PHONE = "Phone"
    SLIDER = "Slider"
    SIGNATURE_INPUT = "Signature Input"
    TAGS_INPUT = "Tags Input"
    INPUT_OTP = "Input OTP"
    LOCATION_INPUT = "Location Input"


def variant_key(variant: str) -> str:
    """
    Normalize a variant spelling for lookup.

    "Date Picker", "DatePicker", "date-picker" and "date_picker" all
    normalize to "datepicker".
    """
    return "".join(ch for ch in str(variant).lower() if ch.isalnum())


# Editor JSON "type" values that do not simply normalize to a variant name
EDITOR_TYPE_TO_VARIANT: dict[str, Variant] = {
    "text": Variant.INPUT,
    "email": Variant.INPUT,
    "url": Variant.INPUT,
    "tel": Variant.INPUT,
    "number": Variant.INPUT,
    "search": Variant.INPUT,
    "file": Variant.FILE_INPUT,
    "date": Variant.DATE_PICKER,
    "datetime": Variant.DATETIME_PICKER,
    "smart-datetime": Variant.SMART_DATETIME_INPUT,
    "signature": Variant.SIGNATURE_INPUT,
    "tags": Variant.TAGS_INPUT,
    "otp": Variant.INPUT_OTP,
    "location": Variant.LOCATION_INPUT,
}

# HTML input types an Input control keeps when converted from editor JSON
INPUT_TYPES = frozenset({"text", "email", "url", "tel", "number", "search"})

_VARIANTS_BY_KEY = {variant_key(v.value): v for v in Variant}


def variant_for_editor_type(editor_type: str) -> str:
    """Map an editor JSON "type" to a variant name."""
    editor_type = str(editor_type).strip()
    mapped = EDITOR_TYPE_TO_VARIANT.get(editor_type.lower())
    if mapped is not None:
        return mapped.value
    known = _VARIANTS_BY_KEY.get(variant_key(editor_type))
    if known is not None:
        return known.value
    # Unknown types pass through title-cased; the registry skips them later
    return editor_type[:1].upper() + editor_type[1:]


class FieldOption(BaseModel):
    """One selectable option of a choice field."""

    label: str = Field(..., description="Text shown to the user")
    value: str = Field(..., description="Value written into the form data")


class UploadedFile(BaseModel):
    """A file submitted through a File Input field."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., description="Original file name")
    size: int = Field(..., ge=0, description="Size in bytes")
    content_type: str = Field(
        default="application/octet-stream",
        alias="type",
        description="MIME type reported by the browser",
    )


class FieldSpec(BaseModel):
    """
    Specification of a single form field.

    `variant` is kept as a plain string so that fields with an
    unregistered variant can still be represented; the synthesizers skip
    them. Editor keys are accepted in camelCase (`maxLength`,
    `defaultValue`, ...) and keys the compiler does not use are ignored.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    variant: str = Field(..., description="Variant name, e.g. 'Input' or 'Date Picker'")
    name: str = Field(..., description="Data-binding key, unique within a form")

    label: str = Field(default="", description="Label shown above the control")
    placeholder: str | None = Field(default=None, description="Placeholder text")
    description: str | None = Field(default=None, description="Help text")
    required: bool = Field(default=False, description="Whether a value must be supplied")
    disabled: bool = Field(default=False, description="Whether the control is disabled")

    options: list[FieldOption] | None = Field(
        default=None, description="Options for Select, Multi Select and Combobox"
    )

    min: int | float | str | None = Field(default=None, description="Lower bound (number or ISO date)")
    max: int | float | str | None = Field(default=None, description="Upper bound (number or ISO date)")
    step: int | float | None = Field(default=None, description="Slider step size")
    max_length: int | None = Field(default=None, alias="maxLength", ge=1)
    rows: int | None = Field(default=None, ge=1)
    max_tags: int | None = Field(default=None, alias="maxTags", ge=1)
    max_items: int | None = Field(default=None, alias="maxItems", ge=1)
    length: int | None = Field(default=None, ge=1, description="Input OTP code length")
    default_country: str | None = Field(default=None, alias="defaultCountry")

    type: str | None = Field(default=None, description="HTML input type for Input fields")
    checked: bool | None = Field(default=None, description="Initial state of Checkbox/Switch")
    default_value: Any = Field(default=None, alias="defaultValue")
    value: Any = Field(default=None, description="Explicit initial value")

    row_index: int = Field(default=0, alias="rowIndex")

    @field_validator("options", mode="before")
    @classmethod
    def _coerce_options(cls, value: Any) -> Any:
        """Accept bare strings as options whose label equals the value."""
        if isinstance(value, list):
            return [
                {"label": item, "value": item} if isinstance(item, str) else item
                for item in value
            ]
        return value

    @property
    def initial_value(self) -> Any:
        """Explicit initial value, `defaultValue` taking precedence over `value`."""
        if self.default_value is not None:
            return self.default_value
        return self.value


FieldGroup = Union[FieldSpec, list[FieldSpec]]


def column_span(group_size: int) -> int:
    """Columns (out of 12) given to each member of a row of `group_size` fields."""
    if group_size <= 1:
        return 12
    if group_size == 2:
        return 6
    return max(12 // group_size, 3)


def _convert_editor_entry(entry: Any) -> Any:
    """Convert one editor JSON field (with `type`, no `variant`) to FieldSpec input."""
    if isinstance(entry, list):
        return [_convert_editor_entry(item) for item in entry]
    if not isinstance(entry, dict) or "variant" in entry or "type" not in entry:
        return entry

    converted = dict(entry)
    editor_type = str(converted.get("type") or "")
    converted["variant"] = variant_for_editor_type(editor_type)
    if editor_type.lower() in INPUT_TYPES:
        converted["type"] = editor_type.lower()
    else:
        converted.pop("type", None)
    return converted


class FormDefinition(BaseModel):
    """Ordered sequence of field groups describing one form."""

    fields: list[FieldGroup] = Field(default_factory=list, description="Field groups in render order")

    @field_validator("fields", mode="before")
    @classmethod
    def _convert_editor_fields(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [_convert_editor_entry(entry) for entry in value]
        return value

    def groups(self) -> list[tuple[FieldSpec, ...]]:
        """Field groups as tuples; a single field is a one-member tuple."""
        result = []
        for entry in self.fields:
            if isinstance(entry, FieldSpec):
                result.append((entry,))
            elif entry:
                result.append(tuple(entry))
        return result

    def flatten(self) -> list[FieldSpec]:
        """All fields in declaration order, groups expanded in place."""
        return [field for group in self.groups() for field in group]


def load_form_definition(data: Any) -> FormDefinition:
    """
    Read a form definition from any of its surface encodings.

    Accepts a FormDefinition, a JSON string, an editor object with a
    "fields" list, or a bare list of fields/groups (FieldSpec objects or
    dicts).

    Raises:
        InvalidFormDefinition: If the input cannot be read as a form definition.
    """
    if isinstance(data, FormDefinition):
        return data

    if isinstance(data, (str, bytes)):
        try:
            data = json.loads(data)
        except json.JSONDecodeError as e:
            raise InvalidFormDefinition(f"Invalid JSON: {e.msg}") from e

    if isinstance(data, (list, tuple)):
        data = {"fields": list(data)}

    if not isinstance(data, dict) or not isinstance(data.get("fields", []), list):
        raise InvalidFormDefinition(
            "Form definition must be a list of fields or an object with a 'fields' list"
        )

    try:
        return FormDefinition.model_validate(data)
    except ValidationError as e:
        raise InvalidFormDefinition(f"Invalid form definition: {e.error_count()} error(s): {e}") from e
