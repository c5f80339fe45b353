"""
Validator rules.

A validator rule turns one FieldSpec into two equivalent things: the
pydantic annotation used by the Schema Synthesizer, and the zod
expression emitted by the Code Synthesizer. Keeping both on the same
class is what keeps the live schema and the generated code in step.
"""

import base64
import binascii
import json
import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Literal, Optional, Sequence

from pydantic import AfterValidator, Field, StrictBool, StringConstraints
from typing_extensions import Annotated

from formgen.models.field_definitions import FieldSpec, UploadedFile


class ValueKind(str, Enum):
    """Runtime shape of a field's bound value."""

    STRING = "string"
    BOOLEAN = "boolean"
    CHOICE = "choice"
    MULTI_CHOICE = "multi_choice"
    STRING_LIST = "string_list"
    NUMBER = "number"
    DATE = "date"
    DATETIME = "datetime"
    FILES = "files"
    LOCATION = "location"


# Field(...) keyword arguments; an empty dict means the field is required
FieldKwargs = dict[str, Any]

_DATA_URL_PREFIX = re.compile(r"^data:[\w.+/-]*(?:;[\w=.+-]+)*;base64,")


def js_literal(value: Any) -> str:
    """Render a Python value as a TS literal."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(js_literal(item) for item in value) + "]"
    return json.dumps(str(value), ensure_ascii=False)


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _as_date(value: Any) -> date | None:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value)
        except ValueError:
            return None
    return None


def _reject_unlisted(value: str) -> str:
    raise ValueError("No options are available for this field")


def _check_base64(value: str) -> str:
    payload = _DATA_URL_PREFIX.sub("", value, count=1)
    try:
        base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError):
        raise ValueError("Value must be a base64 payload or base64 data URL")
    return value


def _check_base64_or_empty(value: str) -> str:
    if value == "":
        return value
    return _check_base64(value)


def _exact_length_or_empty(length: int):
    def check(value: str) -> str:
        if value and len(value) != length:
            raise ValueError(f"Code must be exactly {length} characters")
        return value

    return check


def _max_file_size(max_size: int):
    def check(file: UploadedFile) -> UploadedFile:
        if file.size > max_size:
            raise ValueError(f"File '{file.name}' exceeds {max_size} bytes")
        return file

    return check


def _choice_annotation(values: Sequence[str], allow_empty: bool) -> Any:
    """Literal over the option values; an impossible string when there are none."""
    allowed = tuple(values) + (("",) if allow_empty else ())
    if allowed:
        return Literal[allowed]  # type: ignore[valid-type]
    return Annotated[str, AfterValidator(_reject_unlisted)]


def _zod_enum(values: Sequence[str]) -> str:
    return "z.enum([" + ", ".join(js_literal(v) for v in values) + "])"


class ValidatorRule:
    """Base class: how one variant validates its value."""

    value_kind: ValueKind = ValueKind.STRING

    def python_field(self, field: FieldSpec, options: Sequence[str]) -> tuple[Any, FieldKwargs]:
        """Return the pydantic annotation and Field kwargs for `field`."""
        raise NotImplementedError

    def zod(self, field: FieldSpec, options: Sequence[str]) -> str:
        """Return the equivalent zod expression as source text."""
        raise NotImplementedError


class TextValidator(ValidatorRule):
    """String; non-empty when required; optional strings may be null."""

    def __init__(self, use_max_length: bool = False):
        self.use_max_length = use_max_length

    def _max_length(self, field: FieldSpec) -> int | None:
        return field.max_length if self.use_max_length else None

    def python_field(self, field, options):
        max_length = self._max_length(field)
        if field.required:
            return Annotated[str, StringConstraints(min_length=1, max_length=max_length)], {}
        return Optional[Annotated[str, StringConstraints(max_length=max_length)]], {"default": None}

    def zod(self, field, options):
        expr = "z.string()"
        if field.required:
            expr += ".min(1)"
        max_length = self._max_length(field)
        if max_length is not None:
            expr += f".max({max_length})"
        if not field.required:
            expr += ".optional()"
        return expr


class BooleanValidator(ValidatorRule):
    """Strict boolean that is never null and defaults to the declared state."""

    value_kind = ValueKind.BOOLEAN

    def python_field(self, field, options):
        return StrictBool, {"default": bool(field.checked)}

    def zod(self, field, options):
        return f"z.boolean().default({js_literal(bool(field.checked))})"


class ChoiceValidator(ValidatorRule):
    """One of the option values; optional choices also accept "" and null."""

    value_kind = ValueKind.CHOICE

    def python_field(self, field, options):
        if field.required:
            return _choice_annotation(options, allow_empty=False), {}
        return Optional[_choice_annotation(options, allow_empty=True)], {"default": None}

    def zod(self, field, options):
        if field.required:
            return _zod_enum(options) if options else "z.never()"
        if options:
            return _zod_enum(options) + '.or(z.literal("")).optional()'
        return 'z.literal("").optional()'


class ListValidator(ValidatorRule):
    """
    List of strings, optionally restricted to the option values.

    `max_attr` names the FieldSpec attribute holding the item limit
    (`max_items` for Multi Select, `max_tags` for Tags Input).
    """

    def __init__(self, max_attr: str, restrict_to_options: bool):
        self.max_attr = max_attr
        self.restrict_to_options = restrict_to_options
        self.value_kind = ValueKind.MULTI_CHOICE if restrict_to_options else ValueKind.STRING_LIST

    def python_field(self, field, options):
        item = _choice_annotation(options, allow_empty=False) if self.restrict_to_options else str
        constraints = Field(
            min_length=1 if field.required else None,
            max_length=getattr(field, self.max_attr),
        )
        annotation = Annotated[list[item], constraints]  # type: ignore[valid-type]
        if field.required:
            return annotation, {}
        return annotation, {"default_factory": list}

    def zod(self, field, options):
        if not self.restrict_to_options:
            item = "z.string()"
        else:
            item = _zod_enum(options) if options else "z.never()"
        expr = f"z.array({item})"
        if field.required:
            expr += ".min(1)"
        limit = getattr(field, self.max_attr)
        if limit is not None:
            expr += f".max({limit})"
        if not field.required:
            expr += ".optional()"
        return expr


class NumberValidator(ValidatorRule):
    """Number bounded by the field's min/max."""

    value_kind = ValueKind.NUMBER

    def python_field(self, field, options):
        annotation = Annotated[
            float,
            Field(strict=True, ge=_as_number(field.min), le=_as_number(field.max)),
        ]
        if field.required:
            return annotation, {}
        return Optional[annotation], {"default": None}

    def zod(self, field, options):
        expr = "z.number()"
        low, high = _as_number(field.min), _as_number(field.max)
        if low is not None:
            expr += f".min({js_literal(low)})"
        if high is not None:
            expr += f".max({js_literal(high)})"
        if not field.required:
            expr += ".optional()"
        return expr


class DateValidator(ValidatorRule):
    """
    Date (or datetime) value; unset until the user picks one.

    A date is bounded below by the field's `min`, or by `earliest_date`
    when the field has none, matching the days the calendar disables.
    """

    def __init__(self, with_time: bool = False, earliest_date: str | None = None):
        self.with_time = with_time
        self.earliest_date = earliest_date
        self.value_kind = ValueKind.DATETIME if with_time else ValueKind.DATE

    def _bounds(self, field: FieldSpec) -> tuple[date | None, date | None]:
        if self.with_time:
            return None, None
        low = field.min if isinstance(field.min, str) else self.earliest_date
        return _as_date(low), _as_date(field.max)

    def python_field(self, field, options):
        low, high = self._bounds(field)
        annotation: Any = datetime if self.with_time else Annotated[date, Field(ge=low, le=high)]
        if field.required:
            return annotation, {}
        return Optional[annotation], {"default": None}

    def zod(self, field, options):
        expr = "z.coerce.date()"
        low, high = self._bounds(field)
        if low is not None:
            expr += f".min(new Date({js_literal(low.isoformat())}))"
        if high is not None:
            expr += f".max(new Date({js_literal(high.isoformat())}))"
        if not field.required:
            expr += ".optional()"
        return expr


class FileValidator(ValidatorRule):
    """List of uploaded files limited in count and size."""

    value_kind = ValueKind.FILES

    def __init__(self, max_files: int, max_size: int):
        self.max_files = max_files
        self.max_size = max_size

    def python_field(self, field, options):
        item = Annotated[UploadedFile, AfterValidator(_max_file_size(self.max_size))]
        annotation = Annotated[
            list[item],  # type: ignore[valid-type]
            Field(min_length=1 if field.required else None, max_length=self.max_files),
        ]
        if field.required:
            return annotation, {}
        return Optional[annotation], {"default_factory": list}

    def zod(self, field, options):
        expr = "z.array(z.instanceof(File))"
        if field.required:
            expr += ".min(1)"
        expr += f".max({self.max_files})"
        expr += f".refine((files) => files.every((file) => file.size <= {self.max_size}))"
        if not field.required:
            expr += ".nullable().optional()"
        return expr


class Base64Validator(ValidatorRule):
    """Opaque base64 payload such as a drawn signature."""

    def python_field(self, field, options):
        if field.required:
            return Annotated[str, StringConstraints(min_length=1), AfterValidator(_check_base64)], {}
        return Optional[Annotated[str, AfterValidator(_check_base64_or_empty)]], {"default": None}

    def zod(self, field, options):
        return "z.string().min(1)" if field.required else "z.string().optional()"


class CodeValidator(ValidatorRule):
    """Fixed-length code string (one-time passwords)."""

    def __init__(self, default_length: int):
        self.default_length = default_length

    def length_for(self, field: FieldSpec) -> int:
        return field.length or self.default_length

    def python_field(self, field, options):
        length = self.length_for(field)
        if field.required:
            return Annotated[str, StringConstraints(min_length=length, max_length=length)], {}
        return (
            Optional[Annotated[str, AfterValidator(_exact_length_or_empty(length))]],
            {"default": None},
        )

    def zod(self, field, options):
        length = self.length_for(field)
        if field.required:
            return f"z.string().length({length})"
        return f'z.string().length({length}).or(z.literal("")).optional()'


class LocationValidator(ValidatorRule):
    """[country, state] pair; a required location needs a country."""

    value_kind = ValueKind.LOCATION

    def python_field(self, field, options):
        if field.required:
            return tuple[Annotated[str, StringConstraints(min_length=1)], str], {}
        return Optional[tuple[str, str]], {"default": None}

    def zod(self, field, options):
        if field.required:
            return "z.tuple([z.string().min(1), z.string()])"
        return "z.tuple([z.string(), z.string()]).optional()"
