"""
Form Compiler.

This is the main entry point for formgen. Give it a form definition, get
back a validation schema, default values and the form component source.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic_core import to_jsonable_python

from formgen.config import FormGenConfig, get_config
from formgen.exceptions import InvalidFormDefinition
from formgen.guardrails.input_guardrails import DefinitionCheckResult, check_field_name, inspect_form
from formgen.guardrails.output_guardrails import SchemaValidationResult, check_artifacts
from formgen.models.field_definitions import FieldSpec, FormDefinition, load_form_definition
from formgen.models.schema_output import ValidationSchema
from formgen.models.state import StateBag
from formgen.models.validation_result import SynthesisWarning, ValidationResult
from formgen.preview.dispatcher import ControlDescription
from formgen.preview.dispatcher import dispatch_control as _dispatch_control
from formgen.synthesis.code import code_from_resolution
from formgen.synthesis.defaults import defaults_from_resolution
from formgen.synthesis.resolve import Resolution, resolve_form
from formgen.synthesis.schema import schema_from_resolution
from formgen.variants.registry import OptionCatalogs, VariantRegistry, build_registry, default_registry

logger = logging.getLogger(__name__)


@dataclass
class CompiledForm:
    """The three synchronized artifacts of one form definition."""

    schema: ValidationSchema
    defaults: dict[str, Any]
    code: str
    warnings: list[SynthesisWarning] = field(default_factory=list)
    input_check: DefinitionCheckResult | None = None
    output_check: SchemaValidationResult | None = None

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        return self.schema.validate(data)

    def to_form_config(self) -> dict[str, Any]:
        """Export complete form configuration for client libraries."""
        config = {
            "schema": self.schema.to_json_schema(),
            "uiSchema": self.schema.to_ui_schema(),
            "defaultValues": to_jsonable_python(self.defaults),
            "code": self.code,
            "warnings": [w.model_dump(mode="json") for w in self.warnings],
        }
        if self.input_check is not None:
            config["inputCheck"] = self.input_check.model_dump(mode="json")
        if self.output_check is not None:
            config["outputCheck"] = self.output_check.model_dump()
        return config


class FormCompiler:
    """
    Compiler for form definitions.

    Usage:
        compiler = FormCompiler()

        compiled = compiler.compile([
            [
                {"variant": "Input", "name": "email", "type": "email", "required": True},
                {"variant": "Switch", "name": "subscribe"},
            ],
        ])

        compiled.schema.validate({"email": "a@b.co", "subscribe": True})
        print(compiled.code)
    """

    def __init__(
        self,
        registry: VariantRegistry | None = None,
        config: FormGenConfig | None = None,
        catalogs: OptionCatalogs | None = None,
        enable_guardrails: bool | None = None,
        pre_validate_fields: bool = False,
    ):
        """
        Initialize the compiler.

        Args:
            registry: Variant registry to use. If None, one is built from
                `config` and `catalogs` (or the cached default registry).
            config: Settings. If None, uses the current configuration.
            catalogs: Option catalogs keyed by variant, see build_registry.
            enable_guardrails: Whether to run input/output guardrails.
                If None, uses config.enable_guardrails.
            pre_validate_fields: Whether to reject invalid field names
                with InvalidFormDefinition instead of warning about them.
        """
        self.config = config or get_config()
        if registry is None:
            if config is None and catalogs is None:
                registry = default_registry()
            else:
                registry = build_registry(catalogs, self.config)
        self.registry = registry
        self.enable_guardrails = (
            self.config.enable_guardrails if enable_guardrails is None else enable_guardrails
        )
        self.pre_validate_fields = pre_validate_fields

    def _resolve(self, form: Any) -> tuple[FormDefinition, Resolution]:
        form = load_form_definition(form)
        if self.pre_validate_fields:
            invalid_fields = []
            for spec in form.flatten():
                is_valid, error = check_field_name(spec.name)
                if not is_valid:
                    invalid_fields.append(f"'{spec.name}': {error}")
            if invalid_fields:
                raise InvalidFormDefinition(
                    "Invalid field names detected:\n" + "\n".join(f"  - {f}" for f in invalid_fields)
                )
        return form, resolve_form(form, self.registry)

    def synthesize_schema(self, form: Any) -> ValidationSchema:
        """Build the validation schema of a form."""
        _, resolution = self._resolve(form)
        return schema_from_resolution(resolution)

    def synthesize_defaults(self, form: Any) -> dict[str, Any]:
        """Build the default values of a form."""
        _, resolution = self._resolve(form)
        return defaults_from_resolution(resolution)

    def synthesize_code(self, form: Any) -> str:
        """
        Emit the formatted form component source.

        Raises:
            FormattingError: If the emitted source is structurally malformed.
        """
        _, resolution = self._resolve(form)
        return code_from_resolution(resolution, self.config)

    def dispatch_control(self, spec: FieldSpec | dict, state_bag: StateBag) -> ControlDescription | None:
        """Describe the live control of one field; None for unknown variants."""
        if not isinstance(spec, FieldSpec):
            spec = FieldSpec.model_validate(spec)
        return _dispatch_control(spec, state_bag, self.registry)

    def compile(self, form: Any) -> CompiledForm:
        """
        Produce schema, defaults and code from one form definition.

        Args:
            form: A FormDefinition, a list of fields/groups, an editor
                object with a "fields" list, or JSON text of either.

        Returns:
            CompiledForm with all three artifacts and the warnings
            collected while compiling.

        Raises:
            InvalidFormDefinition: If `form` cannot be read as a form definition.
            FormattingError: If the emitted source is structurally malformed.
        """
        form, resolution = self._resolve(form)
        schema = schema_from_resolution(resolution)
        defaults = defaults_from_resolution(resolution)
        code = code_from_resolution(resolution, self.config)

        compiled = CompiledForm(
            schema=schema,
            defaults=defaults,
            code=code,
            warnings=list(resolution.warnings),
        )
        if self.enable_guardrails:
            compiled.input_check = inspect_form(form, self.registry)
            compiled.output_check = check_artifacts(schema, defaults)
            known = {(w.kind, w.field_name, w.message) for w in compiled.warnings}
            for warning in compiled.input_check.warnings:
                if (warning.kind, warning.field_name, warning.message) not in known:
                    compiled.warnings.append(warning)
            if not compiled.output_check.is_valid:
                logger.error(f"Synthesized artifacts failed checks: {compiled.output_check.errors}")

        logger.info(
            f"Compiled form: {len(schema)} field(s), {len(compiled.warnings)} warning(s)"
        )
        return compiled


def _compiler(registry: VariantRegistry | None) -> FormCompiler:
    return FormCompiler(registry=registry, enable_guardrails=False)


def synthesize_schema(form: Any, registry: VariantRegistry | None = None) -> ValidationSchema:
    """
    Convenience function to build a validation schema.

    Example:
        >>> from formgen import synthesize_schema
        >>> schema = synthesize_schema([{"variant": "Input", "name": "email", "required": True}])
        >>> schema.validate({"email": ""}).is_valid
        False
    """
    return _compiler(registry).synthesize_schema(form)


def synthesize_defaults(form: Any, registry: VariantRegistry | None = None) -> dict[str, Any]:
    """Convenience function to build default values."""
    return _compiler(registry).synthesize_defaults(form)


def synthesize_code(form: Any, registry: VariantRegistry | None = None) -> str:
    """Convenience function to emit the form component source."""
    return _compiler(registry).synthesize_code(form)


def dispatch_control(
    spec: FieldSpec | dict,
    state_bag: StateBag,
    registry: VariantRegistry | None = None,
) -> ControlDescription | None:
    """Convenience function to describe the live control of one field."""
    return _compiler(registry).dispatch_control(spec, state_bag)


def compile_form(
    form: Any,
    registry: VariantRegistry | None = None,
    enable_guardrails: bool | None = None,
) -> CompiledForm:
    """
    Convenience function to compile a form definition.

    Example:
        >>> from formgen import compile_form
        >>> compiled = compile_form({"fields": [{"type": "email", "name": "email"}]})
        >>> compiled.defaults
        {'email': ''}
    """
    return FormCompiler(registry=registry, enable_guardrails=enable_guardrails).compile(form)
