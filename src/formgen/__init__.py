"""
formgen: form field specification compiler.

One form definition, three synchronized artifacts: a validation schema,
default values and the source of a React form component.

Simple Usage:
    from formgen import compile_form

    compiled = compile_form([
        [
            {"variant": "Input", "name": "email", "type": "email", "required": True},
            {"variant": "Switch", "name": "subscribe", "label": "Subscribe"},
        ],
    ])

    compiled.defaults         # {"email": "", "subscribe": False}
    compiled.schema.validate({"email": "a@b.co", "subscribe": True})
    print(compiled.code)

Advanced Usage:
    from formgen import FormCompiler, build_registry

    registry = build_registry(catalogs={"Combobox": ["Red", "Green"]})
    compiler = FormCompiler(registry=registry, pre_validate_fields=True)

    schema = compiler.synthesize_schema(form)
    json_schema = schema.to_json_schema()

Live preview:
    from formgen import StateBag, render_preview

    state = StateBag.for_form(form)
    rows = render_preview(form, state)
    rows[0].controls[0].fire("change", "hello")
"""

from formgen.compiler import (
    CompiledForm,
    FormCompiler,
    compile_form,
    dispatch_control,
    synthesize_code,
    synthesize_defaults,
    synthesize_schema,
)
from formgen.exceptions import (
    FormattingError,
    FormGenError,
    InvalidFormDefinition,
    MalformedOptions,
    NameCollision,
    UnknownVariant,
)
from formgen.models import (
    FieldOption,
    FieldSpec,
    FieldValidationError,
    FormDefinition,
    StateBag,
    SynthesisWarning,
    ValidationResult,
    ValidationSchema,
    Variant,
    load_form_definition,
)
from formgen.preview import ControlDescription, render_preview, submit_preview
from formgen.synthesis import format_source
from formgen.variants import VariantRegistry, build_registry, default_registry

__all__ = [
    # Main interface
    "CompiledForm",
    "FormCompiler",
    "compile_form",
    "dispatch_control",
    "synthesize_code",
    "synthesize_defaults",
    "synthesize_schema",
    "format_source",
    # Input models
    "FieldOption",
    "FieldSpec",
    "FormDefinition",
    "Variant",
    "load_form_definition",
    # Output models
    "ValidationSchema",
    "ValidationResult",
    "FieldValidationError",
    "SynthesisWarning",
    # Registry
    "VariantRegistry",
    "build_registry",
    "default_registry",
    # Preview
    "ControlDescription",
    "StateBag",
    "render_preview",
    "submit_preview",
    # Errors
    "FormGenError",
    "FormattingError",
    "InvalidFormDefinition",
    "MalformedOptions",
    "NameCollision",
    "UnknownVariant",
]

__version__ = "0.1.0"
