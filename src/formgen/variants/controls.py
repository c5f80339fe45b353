"""
Control rules.

A control rule says which interactive component renders a variant, which
FieldState slots it keeps, how its props are built, and how each UI event
maps to the value written into the bound form data. The same rule names
the code template and the imports/state hooks the Code Synthesizer emits.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Callable, Mapping

from formgen.models.field_definitions import FieldOption, FieldSpec, UploadedFile
from formgen.models.state import FieldState


@dataclass(frozen=True)
class ComponentImport:
    """One import statement of the generated component."""

    module: str
    names: tuple[str, ...] = ()
    default: str | None = None


@dataclass(frozen=True)
class StateHook:
    """
    Per-field React state the generated component declares.

    `kind` is "state" (useState pair) or "ref" (useRef); the identifier is
    the camelCased field name followed by `suffix`.
    """

    kind: str
    suffix: str
    ts_type: str
    initial: str


@dataclass(frozen=True)
class ControlContext:
    """Inputs a props builder needs besides the field and its state."""

    options: tuple[FieldOption, ...] = ()
    default_phone_country: str = "TR"
    earliest_date: str = "1900-01-01"
    file_max_count: int = 5
    file_max_size: int = 4 * 1024 * 1024
    otp_length: int = 6
    slider_min: float = 0
    slider_max: float = 100
    slider_step: float = 1


PropsBuilder = Callable[[FieldSpec, FieldState, ControlContext], dict[str, Any]]
# Updates the field's own slot and returns the value for the bound form data,
# or UNCHANGED when the payload is ignored
EventBinding = Callable[[FieldState, Any], Any]
StateSeeder = Callable[[FieldState, Any], None]

UNCHANGED: Any = object()


@dataclass(frozen=True)
class ControlRule:
    component: str
    slots: tuple[str, ...]
    props: PropsBuilder
    events: Mapping[str, EventBinding]
    seed: StateSeeder
    template: str
    imports: tuple[ComponentImport, ...] = ()
    hooks: tuple[StateHook, ...] = field(default_factory=tuple)
    # Emit the options as a module-level const instead of inline items
    options_const: bool = False


# Imports every generated component needs
BASE_IMPORTS: tuple[ComponentImport, ...] = (
    ComponentImport("react-hook-form", ("useForm",)),
    ComponentImport("@hookform/resolvers/zod", ("zodResolver",)),
    ComponentImport("zod", ("z",)),
    ComponentImport("sonner", ("toast",)),
    ComponentImport(
        "@/components/ui/form",
        ("Form", "FormControl", "FormDescription", "FormField", "FormItem", "FormLabel", "FormMessage"),
    ),
    ComponentImport("@/components/ui/button", ("Button",)),
)

CN = ComponentImport("@/lib/utils", ("cn",))
BUTTON = ComponentImport("@/components/ui/button", ("Button",))
POPOVER = ComponentImport("@/components/ui/popover", ("Popover", "PopoverContent", "PopoverTrigger"))


def number_or(value: Any, fallback: float) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return fallback
    return value


def otp_slot_groups(length: int) -> list[list[int]]:
    """Split OTP slot indexes into two halves (3+3 for six digits)."""
    first = (length + 1) // 2
    return [list(range(first)), list(range(first, length))]


def _number_text(value: float) -> str:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _as_date(payload: Any) -> date | None:
    """The payload as a date; None when it is empty or not a date."""
    if isinstance(payload, datetime):
        return payload.date()
    if isinstance(payload, date):
        return payload
    if isinstance(payload, str) and payload:
        try:
            return date.fromisoformat(payload)
        except ValueError:
            return None
    return None


def _as_datetime(payload: Any) -> datetime | None:
    """The payload as a datetime; None when it is empty or not a datetime."""
    if isinstance(payload, datetime):
        return payload
    if isinstance(payload, str) and payload:
        try:
            return datetime.fromisoformat(payload)
        except ValueError:
            return None
    return None


def _is_cleared(payload: Any) -> bool:
    return payload is None or payload == ""


def _name_of(payload: Any) -> str:
    # Location selectors report {name, ...} records or plain names
    if isinstance(payload, Mapping):
        return str(payload.get("name") or "")
    return str(payload or "")


def _common_props(spec: FieldSpec) -> dict[str, Any]:
    return {
        "name": spec.name,
        "label": spec.label,
        "description": spec.description,
        "required": spec.required,
        "disabled": spec.disabled,
    }


def _option_dicts(ctx: ControlContext) -> list[dict[str, str]]:
    return [option.model_dump() for option in ctx.options]


# Event bindings

def change_text(state: FieldState, payload: Any) -> str:
    text = "" if payload is None else str(payload)
    state.set("value", text)
    return text


def toggle_checked(state: FieldState, payload: Any) -> bool:
    checked = (not state.checked) if payload is None else bool(payload)
    state.set("checked", checked)
    return checked


def change_selected(state: FieldState, payload: Any) -> list[str]:
    values = [str(v) for v in (payload or [])]
    state.set("selected", values)
    return list(values)


def change_tags(state: FieldState, payload: Any) -> list[str]:
    tags = [str(v) for v in (payload or [])]
    state.set("tags", tags)
    return list(tags)


def select_date(state: FieldState, payload: Any) -> Any:
    if _is_cleared(payload):
        state.set("date", None)
        return None
    picked = _as_date(payload)
    if picked is None:
        return UNCHANGED
    state.set("date", picked)
    return picked


def change_datetime(state: FieldState, payload: Any) -> Any:
    if _is_cleared(payload):
        state.set("datetime", None)
        return None
    picked = _as_datetime(payload)
    if picked is None:
        return UNCHANGED
    state.set("datetime", picked)
    return picked


def change_files(state: FieldState, payload: Any) -> list[UploadedFile]:
    files = [
        item if isinstance(item, UploadedFile) else UploadedFile.model_validate(item)
        for item in (payload or [])
    ]
    state.set("files", files or None)
    return files


def change_slider(state: FieldState, payload: Any) -> Any:
    # Sliders report a list of thumb positions; forms bind the first
    value = payload[0] if isinstance(payload, (list, tuple)) and payload else payload
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        return UNCHANGED
    state.set("value", _number_text(value))
    return value


def change_signature(state: FieldState, payload: Any) -> str:
    data_url = str(payload or "")
    state.set("canvas", state.canvas.loaded(data_url))
    return data_url


def change_country(state: FieldState, payload: Any) -> list[str]:
    country = _name_of(payload)
    state.set("country", country)
    return [country, state.state]


def change_state(state: FieldState, payload: Any) -> list[str]:
    region = _name_of(payload)
    state.set("state", region)
    return [state.country, region]


# State seeders

def seed_value(state: FieldState, default: Any) -> None:
    state.set("value", "" if default is None else str(default))


def seed_checked(state: FieldState, default: Any) -> None:
    state.set("checked", bool(default))


def seed_selected(state: FieldState, default: Any) -> None:
    state.set("selected", list(default or []))


def seed_tags(state: FieldState, default: Any) -> None:
    state.set("tags", list(default or []))


def seed_date(state: FieldState, default: Any) -> None:
    state.set("date", _as_date(default))


def seed_datetime(state: FieldState, default: Any) -> None:
    state.set("datetime", _as_datetime(default))


def seed_files(state: FieldState, default: Any) -> None:
    state.set("files", list(default) if default else None)


def seed_number(state: FieldState, default: Any) -> None:
    state.set("value", "" if default is None else _number_text(default))


def seed_canvas(state: FieldState, default: Any) -> None:
    state.set("canvas", state.canvas.loaded(default))


def seed_location(state: FieldState, default: Any) -> None:
    country, region = (list(default or []) + ["", ""])[:2]
    state.set("country", country or "")
    state.set("state", region or "")


# Props builders

def text_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "type": spec.type or "text",
        "placeholder": spec.placeholder,
        "value": state.value,
    }


def textarea_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "placeholder": spec.placeholder,
        "rows": spec.rows,
        "maxLength": spec.max_length,
        "className": "resize-none",
        "value": state.value,
    }


def password_props(spec, state, ctx):
    return {**_common_props(spec), "placeholder": spec.placeholder, "value": state.value}


def phone_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "placeholder": spec.placeholder,
        "defaultCountry": spec.default_country or ctx.default_phone_country,
        "value": state.value,
    }


def checked_props(spec, state, ctx):
    return {**_common_props(spec), "checked": state.checked}


def select_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "options": _option_dicts(ctx),
        "placeholder": spec.placeholder or "Select an option",
        "value": state.value,
    }


def combobox_props(spec, state, ctx):
    selected = next((o.label for o in ctx.options if o.value == state.value), None)
    return {
        **_common_props(spec),
        "options": _option_dicts(ctx),
        "placeholder": spec.placeholder or "Select an option",
        "searchPlaceholder": "Search...",
        "emptyText": "No option found.",
        "value": state.value,
        "selectedLabel": selected,
    }


def multi_select_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "options": _option_dicts(ctx),
        "placeholder": spec.placeholder or "Select options",
        "maxItems": spec.max_items,
        "values": list(state.selected),
    }


def date_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "placeholder": spec.placeholder or "Pick a date",
        "selected": state.date,
        "fromDate": spec.min if isinstance(spec.min, str) else ctx.earliest_date,
        "toDate": spec.max if isinstance(spec.max, str) else None,
    }


def datetime_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "value": state.datetime,
        "format": [["months", "days", "years"], ["hours", "minutes", "am/pm"]],
    }


def smart_datetime_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "placeholder": spec.placeholder or "e.g. tomorrow at 3pm",
        "value": state.datetime,
    }


def file_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "value": state.files,
        "dropzoneOptions": {
            "maxFiles": ctx.file_max_count,
            "maxSize": ctx.file_max_size,
            "multiple": True,
        },
    }


def slider_props(spec, state, ctx):
    low = number_or(spec.min, ctx.slider_min)
    high = number_or(spec.max, ctx.slider_max)
    current = float(state.value) if state.value else low
    return {
        **_common_props(spec),
        "min": low,
        "max": high,
        "step": number_or(spec.step, ctx.slider_step),
        "value": [current],
    }


def signature_props(spec, state, ctx):
    return {**_common_props(spec), "canvas": state.canvas}


def tags_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "placeholder": spec.placeholder or "Enter your tags",
        "maxTags": spec.max_tags,
        "value": list(state.tags),
    }


def otp_props(spec, state, ctx):
    length = spec.length or ctx.otp_length
    return {
        **_common_props(spec),
        "maxLength": length,
        "slotGroups": otp_slot_groups(length),
        "value": state.value,
    }


def location_props(spec, state, ctx):
    return {
        **_common_props(spec),
        "defaultCountry": spec.default_country,
        "country": state.country,
        "state": state.state,
    }
