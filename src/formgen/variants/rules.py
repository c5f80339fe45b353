"""
Variant rules.

Each variant maps to one VariantRule: a validator rule (schema), a
default rule (initial value) and a control rule (live control and code
template), plus documentation used by the variant catalog.
"""

from dataclasses import dataclass, field
from typing import Any, Callable

from formgen.config import FormGenConfig
from formgen.models.field_definitions import FieldOption, FieldSpec, Variant
from formgen.variants import controls as c
from formgen.variants.controls import (
    BUTTON,
    CN,
    POPOVER,
    ComponentImport,
    ControlContext,
    ControlRule,
    StateHook,
)
from formgen.variants.validators import (
    Base64Validator,
    BooleanValidator,
    ChoiceValidator,
    CodeValidator,
    DateValidator,
    FileValidator,
    ListValidator,
    LocationValidator,
    NumberValidator,
    TextValidator,
    ValidatorRule,
    ValueKind,
)

DefaultRule = Callable[[FieldSpec, ControlContext], Any]


@dataclass(frozen=True)
class VariantRule:
    """Everything the compiler knows about one variant."""

    variant: Variant
    validator: ValidatorRule
    default: DefaultRule
    control: ControlRule
    description: str = ""
    example: dict[str, Any] = field(default_factory=dict)
    needs_options: bool = False
    options_catalog: tuple[FieldOption, ...] = ()

    @property
    def value_kind(self) -> ValueKind:
        return self.validator.value_kind

    def options_for(self, spec: FieldSpec) -> tuple[FieldOption, ...]:
        """The field's own options, else the catalog this rule was built with."""
        if spec.options:
            return tuple(spec.options)
        return self.options_catalog

    def describe(self) -> dict[str, Any]:
        return {
            "variant": self.variant.value,
            "value_kind": self.value_kind.value,
            "component": self.control.component,
            "description": self.description,
            "needs_options": self.needs_options,
            "events": sorted(self.control.events),
            "example": self.example,
        }


# Default rules

def default_text(spec: FieldSpec, ctx: ControlContext) -> str:
    initial = spec.initial_value
    return initial if isinstance(initial, str) else ""


def default_choice(spec: FieldSpec, ctx: ControlContext) -> str:
    initial = spec.initial_value
    values = [option.value for option in ctx.options]
    return initial if isinstance(initial, str) and initial in values else ""


def default_checked(spec: FieldSpec, ctx: ControlContext) -> bool:
    return bool(spec.checked)


def default_list(spec: FieldSpec, ctx: ControlContext) -> list[str]:
    initial = spec.initial_value
    if isinstance(initial, (list, tuple)):
        return [str(item) for item in initial]
    return []


def default_selected(spec: FieldSpec, ctx: ControlContext) -> list[str]:
    values = {option.value for option in ctx.options}
    selected = [item for item in default_list(spec, ctx) if item in values]
    if spec.max_items is not None:
        selected = selected[: spec.max_items]
    return selected


def default_files(spec: FieldSpec, ctx: ControlContext) -> list:
    return []


def default_unset(spec: FieldSpec, ctx: ControlContext) -> None:
    return None


def default_slider(spec: FieldSpec, ctx: ControlContext) -> float:
    initial = spec.initial_value
    if isinstance(initial, (int, float)) and not isinstance(initial, bool):
        value = initial
    else:
        value = 0
    low, high = c.number_or(spec.min, None), c.number_or(spec.max, None)
    if low is not None and value < low:
        value = low
    if high is not None and value > high:
        value = high
    return value


def default_location(spec: FieldSpec, ctx: ControlContext) -> list[str]:
    return [spec.default_country or "", ""]


def _rule(variant, validator, default, control, description, example, **kwargs) -> VariantRule:
    example = {"variant": variant.value, **example}
    return VariantRule(
        variant=variant,
        validator=validator,
        default=default,
        control=control,
        description=description,
        example=example,
        **kwargs,
    )


def _text_control(component, props, template, module, hooks=()) -> ControlRule:
    return ControlRule(
        component=component,
        slots=("value",),
        props=props,
        events={"change": c.change_text},
        seed=c.seed_value,
        template=template,
        imports=(ComponentImport(module, (component,)),),
        hooks=tuple(hooks),
    )


def build_rules(
    config: FormGenConfig, catalogs: dict[Variant, tuple[FieldOption, ...]]
) -> dict[Variant, VariantRule]:
    """Build the rule for every variant, in declaration order."""
    choice = ChoiceValidator()
    date_imports = (
        CN,
        BUTTON,
        POPOVER,
        ComponentImport("@/components/ui/calendar", ("Calendar",)),
        ComponentImport("date-fns", ("format",)),
        ComponentImport("lucide-react", ("CalendarIcon",)),
    )

    rules = [
        _rule(
            Variant.INPUT,
            TextValidator(),
            default_text,
            _text_control("Input", c.text_props, "input", "@/components/ui/input"),
            "Single-line text input; `type` selects the HTML input type (email, url, tel, ...).",
            {"name": "email", "label": "Email", "type": "email", "placeholder": "you@example.com", "required": True},
        ),
        _rule(
            Variant.TEXTAREA,
            TextValidator(use_max_length=True),
            default_text,
            _text_control("Textarea", c.textarea_props, "textarea", "@/components/ui/textarea"),
            "Multi-line text input; `maxLength` limits the length and `rows` the height.",
            {"name": "bio", "label": "Bio", "maxLength": 500, "rows": 4},
        ),
        _rule(
            Variant.CHECKBOX,
            BooleanValidator(),
            default_checked,
            ControlRule(
                component="Checkbox",
                slots=("checked",),
                props=c.checked_props,
                events={"toggle": c.toggle_checked, "change": c.toggle_checked},
                seed=c.seed_checked,
                template="checkbox",
                imports=(ComponentImport("@/components/ui/checkbox", ("Checkbox",)),),
            ),
            "Boolean checkbox; `checked` sets the initial state.",
            {"name": "terms", "label": "Accept terms", "checked": False},
        ),
        _rule(
            Variant.SWITCH,
            BooleanValidator(),
            default_checked,
            ControlRule(
                component="Switch",
                slots=("checked",),
                props=c.checked_props,
                events={"toggle": c.toggle_checked, "change": c.toggle_checked},
                seed=c.seed_checked,
                template="switch",
                imports=(ComponentImport("@/components/ui/switch", ("Switch",)),),
            ),
            "Boolean on/off switch; `checked` sets the initial state.",
            {"name": "subscribe", "label": "Subscribe", "checked": True},
        ),
        _rule(
            Variant.SELECT,
            choice,
            default_choice,
            ControlRule(
                component="Select",
                slots=("value",),
                props=c.select_props,
                events={"change": c.change_text},
                seed=c.seed_value,
                template="select",
                imports=(
                    ComponentImport(
                        "@/components/ui/select",
                        ("Select", "SelectContent", "SelectItem", "SelectTrigger", "SelectValue"),
                    ),
                ),
            ),
            "Single choice from `options`.",
            {"name": "plan", "label": "Plan", "options": [
                {"label": "Free", "value": "free"}, {"label": "Pro", "value": "pro"},
            ]},
            needs_options=True,
        ),
        _rule(
            Variant.MULTI_SELECT,
            ListValidator("max_items", restrict_to_options=True),
            default_selected,
            ControlRule(
                component="MultiSelector",
                slots=("selected",),
                props=c.multi_select_props,
                events={"change": c.change_selected},
                seed=c.seed_selected,
                template="multi_select",
                imports=(
                    ComponentImport(
                        "@/components/ui/multi-select",
                        (
                            "MultiSelector",
                            "MultiSelectorContent",
                            "MultiSelectorInput",
                            "MultiSelectorItem",
                            "MultiSelectorList",
                            "MultiSelectorTrigger",
                        ),
                    ),
                ),
            ),
            "Several choices from `options`; `maxItems` limits how many.",
            {"name": "frameworks", "label": "Frameworks", "options": ["React", "Vue", "Svelte"]},
            needs_options=True,
        ),
        _rule(
            Variant.COMBOBOX,
            choice,
            default_choice,
            ControlRule(
                component="Combobox",
                slots=("value",),
                props=c.combobox_props,
                events={"select": c.change_text, "change": c.change_text},
                seed=c.seed_value,
                template="combobox",
                imports=(
                    CN,
                    BUTTON,
                    POPOVER,
                    ComponentImport(
                        "@/components/ui/command",
                        ("Command", "CommandEmpty", "CommandGroup", "CommandInput", "CommandItem", "CommandList"),
                    ),
                    ComponentImport("lucide-react", ("Check", "ChevronsUpDown")),
                ),
                options_const=True,
            ),
            "Searchable single choice; without `options` it offers the language catalog.",
            {"name": "language", "label": "Language"},
            needs_options=True,
            options_catalog=catalogs.get(Variant.COMBOBOX, ()),
        ),
        _rule(
            Variant.DATE_PICKER,
            DateValidator(earliest_date=config.earliest_date),
            default_unset,
            ControlRule(
                component="Calendar",
                slots=("date",),
                props=c.date_props,
                events={"select": c.select_date},
                seed=c.seed_date,
                template="date_picker",
                imports=date_imports,
            ),
            "Calendar date; `min`/`max` take ISO dates.",
            {"name": "birthday", "label": "Birthday", "min": "1900-01-01"},
        ),
        _rule(
            Variant.DATETIME_PICKER,
            DateValidator(with_time=True),
            default_unset,
            ControlRule(
                component="DatetimePicker",
                slots=("datetime",),
                props=c.datetime_props,
                events={"change": c.change_datetime},
                seed=c.seed_datetime,
                template="datetime_picker",
                imports=(ComponentImport("@/components/ui/datetime-picker", ("DatetimePicker",)),),
            ),
            "Date and time picked from segmented inputs.",
            {"name": "meeting", "label": "Meeting time"},
        ),
        _rule(
            Variant.SMART_DATETIME_INPUT,
            DateValidator(with_time=True),
            default_unset,
            ControlRule(
                component="SmartDatetimeInput",
                slots=("datetime",),
                props=c.smart_datetime_props,
                events={"change": c.change_datetime},
                seed=c.seed_datetime,
                template="smart_datetime_input",
                imports=(ComponentImport("@/components/ui/smart-datetime-input", ("SmartDatetimeInput",)),),
            ),
            "Date and time typed in natural language (\"tomorrow at 3pm\").",
            {"name": "reminder", "label": "Remind me"},
        ),
        _rule(
            Variant.FILE_INPUT,
            FileValidator(config.file_max_count, config.file_max_size),
            default_files,
            ControlRule(
                component="FileUploader",
                slots=("files",),
                props=c.file_props,
                events={"change": c.change_files},
                seed=c.seed_files,
                template="file_input",
                imports=(
                    ComponentImport(
                        "@/components/ui/file-upload",
                        ("FileInput", "FileUploader", "FileUploaderContent", "FileUploaderItem"),
                    ),
                    ComponentImport("lucide-react", ("CloudUpload", "Paperclip")),
                ),
                hooks=(StateHook("state", "Files", "File[] | null", "null"),),
            ),
            f"Drag-and-drop upload of up to {config.file_max_count} files.",
            {"name": "documents", "label": "Documents"},
        ),
        _rule(
            Variant.PASSWORD,
            TextValidator(),
            default_text,
            _text_control("PasswordInput", c.password_props, "password", "@/components/ui/password-input"),
            "Masked text input with a visibility toggle.",
            {"name": "password", "label": "Password", "required": True},
        ),
        _rule(
            Variant.PHONE,
            TextValidator(),
            default_text,
            _text_control("PhoneInput", c.phone_props, "phone", "@/components/ui/phone-input"),
            "Phone number with a country selector; `defaultCountry` preselects it.",
            {"name": "phone", "label": "Phone", "defaultCountry": config.default_phone_country},
        ),
        _rule(
            Variant.SLIDER,
            NumberValidator(),
            default_slider,
            ControlRule(
                component="Slider",
                slots=("value",),
                props=c.slider_props,
                events={"change": c.change_slider},
                seed=c.seed_number,
                template="slider",
                imports=(ComponentImport("@/components/ui/slider", ("Slider",)),),
            ),
            "Number picked on a track bounded by `min`/`max` in `step` increments.",
            {"name": "price", "label": "Price", "min": 0, "max": 1000, "step": 10},
        ),
        _rule(
            Variant.SIGNATURE_INPUT,
            Base64Validator(),
            default_text,
            ControlRule(
                component="SignatureInput",
                slots=("canvas",),
                props=c.signature_props,
                events={"change": c.change_signature},
                seed=c.seed_canvas,
                template="signature_input",
                imports=(ComponentImport("@/components/ui/signature-input", default="SignatureInput"),),
                hooks=(StateHook("ref", "CanvasRef", "HTMLCanvasElement", "null"),),
            ),
            "Drawn signature, submitted as a base64 image.",
            {"name": "signature", "label": "Signature"},
        ),
        _rule(
            Variant.TAGS_INPUT,
            ListValidator("max_tags", restrict_to_options=False),
            default_list,
            ControlRule(
                component="TagsInput",
                slots=("tags",),
                props=c.tags_props,
                events={"change": c.change_tags},
                seed=c.seed_tags,
                template="tags_input",
                imports=(ComponentImport("@/components/ui/tags-input", ("TagsInput",)),),
            ),
            "Free-form list of tags; `maxTags` limits how many.",
            {"name": "keywords", "label": "Keywords", "maxTags": 5},
        ),
        _rule(
            Variant.INPUT_OTP,
            CodeValidator(config.otp_default_length),
            default_text,
            ControlRule(
                component="InputOTP",
                slots=("value",),
                props=c.otp_props,
                events={"change": c.change_text},
                seed=c.seed_value,
                template="input_otp",
                imports=(
                    ComponentImport(
                        "@/components/ui/input-otp",
                        ("InputOTP", "InputOTPGroup", "InputOTPSeparator", "InputOTPSlot"),
                    ),
                ),
            ),
            f"One-time code split into slots; `length` defaults to {config.otp_default_length}.",
            {"name": "code", "label": "Verification code", "length": config.otp_default_length},
        ),
        _rule(
            Variant.LOCATION_INPUT,
            LocationValidator(),
            default_location,
            ControlRule(
                component="LocationSelector",
                slots=("country", "state"),
                props=c.location_props,
                events={"country": c.change_country, "state": c.change_state},
                seed=c.seed_location,
                template="location_input",
                imports=(ComponentImport("@/components/ui/location-input", default="LocationSelector"),),
                hooks=(
                    StateHook("state", "Country", "string", '""'),
                    StateHook("state", "State", "string", '""'),
                ),
            ),
            "Country and state/province pair, submitted as [country, state].",
            {"name": "location", "label": "Location"},
        ),
    ]
    return {rule.variant: rule for rule in rules}
