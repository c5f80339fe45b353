"""Tests for the form compiler."""

import json

import pytest

from formgen import (
    FormCompiler,
    InvalidFormDefinition,
    StateBag,
    compile_form,
    dispatch_control,
    synthesize_code,
    synthesize_defaults,
    synthesize_schema,
)
from formgen.config import FormGenConfig
from formgen.models.validation_result import WarningKind

SIGNUP = [
    [
        {"variant": "Input", "name": "email", "label": "Email", "type": "email", "required": True},
        {"variant": "Switch", "name": "subscribe", "label": "Subscribe"},
    ],
]

EDITOR_JSON = json.dumps({
    "fields": [
        {"type": "email", "name": "email", "label": "Email", "required": True},
        {"type": "switch", "name": "subscribe", "label": "Subscribe"},
    ]
})


class TestSignupScenario:
    """Email and subscribe switch sharing one row."""

    def test_artifacts_agree(self):
        compiled = compile_form(SIGNUP)
        assert compiled.defaults == {"email": "", "subscribe": False}
        assert compiled.schema.field_names == list(compiled.defaults)
        assert compiled.warnings == []
        assert "grid-cols-12" in compiled.code

    def test_validation(self):
        compiled = compile_form(SIGNUP)
        assert not compiled.validate(compiled.defaults).is_valid
        result = compiled.validate({"email": "a@b.co", "subscribe": True})
        assert result.is_valid
        assert result.validated_data == {"email": "a@b.co", "subscribe": True}

    def test_editor_json_matches_field_list(self):
        from_editor = compile_form(EDITOR_JSON)
        from_list = compile_form([field for row in SIGNUP for field in row])
        assert from_editor.defaults == from_list.defaults
        assert from_editor.schema.to_json_schema() == from_list.schema.to_json_schema()
        assert from_editor.code == from_list.code


class TestPriceSliderScenario:
    """A bounded slider."""

    FORM = [{"variant": "Slider", "name": "price", "label": "Price", "min": 0, "max": 1000, "step": 10}]

    def test_artifacts(self):
        compiled = compile_form(self.FORM)
        assert compiled.defaults == {"price": 0}
        assert compiled.validate({"price": 500}).is_valid
        assert not compiled.validate({"price": 1001}).is_valid
        assert "step={10}" in compiled.code


class TestProperties:
    """Properties that hold for every form."""

    FORM = [
        [{"variant": "Input", "name": "first"}, {"variant": "Input", "name": "last"}],
        {"variant": "Combobox", "name": "language"},
        {"variant": "Rating", "name": "stars"},
        {"variant": "Select", "name": "plan"},
        {"variant": "Tags Input", "name": "first"},
        {"variant": "File Input", "name": "documents"},
    ]

    def test_deterministic(self):
        first = compile_form(self.FORM)
        second = compile_form(self.FORM)
        assert first.code == second.code
        assert first.defaults == second.defaults
        assert first.schema.to_json_schema() == second.schema.to_json_schema()

    def test_key_coverage(self):
        compiled = compile_form(self.FORM)
        assert list(compiled.defaults) == compiled.schema.field_names

    def test_warnings(self):
        compiled = compile_form(self.FORM)
        kinds = [w.kind for w in compiled.warnings]
        assert WarningKind.UNKNOWN_VARIANT in kinds
        assert WarningKind.MALFORMED_OPTIONS in kinds
        assert WarningKind.NAME_COLLISION in kinds
        assert len(kinds) == len(set((w.kind, w.field_name, w.message) for w in compiled.warnings))

    def test_guardrail_results(self):
        compiled = compile_form(self.FORM, enable_guardrails=True)
        assert compiled.input_check is not None
        assert compiled.output_check.is_valid

    def test_guardrails_off(self):
        compiled = compile_form(self.FORM, enable_guardrails=False)
        assert compiled.input_check is None
        assert compiled.output_check is None


class TestFormCompiler:
    """Tests for the compiler class."""

    def test_pre_validate_fields(self):
        compiler = FormCompiler(pre_validate_fields=True)
        with pytest.raises(InvalidFormDefinition) as excinfo:
            compiler.compile([{"variant": "Input", "name": "first name"}])
        assert "first name" in str(excinfo.value)

    def test_invalid_definition(self):
        with pytest.raises(InvalidFormDefinition):
            FormCompiler().compile("not json")

    def test_custom_catalogs(self):
        compiler = FormCompiler(catalogs={"Select": ["small", "large"]})
        schema = compiler.synthesize_schema([{"variant": "Select", "name": "size", "required": True}])
        assert schema.is_valid({"size": "large"})
        assert not schema.is_valid({"size": "medium"})

    def test_custom_config(self):
        compiler = FormCompiler(config=FormGenConfig(component_name="Checkout"))
        assert "export default function Checkout()" in compiler.synthesize_code([{"variant": "Input", "name": "a"}])

    def test_dispatch_control_from_dict(self):
        bag = StateBag()
        control = FormCompiler().dispatch_control({"variant": "Switch", "name": "subscribe"}, bag)
        control.fire("toggle")
        assert bag.values == {"subscribe": True}

    def test_to_form_config(self):
        config = compile_form(SIGNUP + [{"variant": "Date Picker", "name": "birthday", "defaultValue": None}]).to_form_config()
        assert set(config) >= {"schema", "uiSchema", "defaultValues", "code", "warnings"}
        assert config["defaultValues"] == {"email": "", "subscribe": False, "birthday": None}
        json.dumps(config)


class TestConvenienceFunctions:
    """Tests for module-level functions."""

    def test_synthesize_functions(self):
        assert synthesize_schema(SIGNUP).field_names == ["email", "subscribe"]
        assert synthesize_defaults(SIGNUP) == {"email": "", "subscribe": False}
        assert synthesize_code(SIGNUP).startswith('"use client"')

    def test_dispatch_control(self):
        control = dispatch_control({"variant": "Rating", "name": "stars"}, StateBag())
        assert control is None


class TestGracefulDegradation:
    """An unknown field leaves the artifacts exactly as if it were absent."""

    KNOWN_EMAIL = {"variant": "Input", "name": "email", "required": True}
    KNOWN_PLAN = {"variant": "Select", "name": "plan", "options": ["free", "pro"]}
    UNKNOWN = {"variant": "Rating", "name": "stars"}

    @pytest.mark.parametrize(
        "with_unknown, without_unknown",
        [
            ([KNOWN_EMAIL, UNKNOWN, KNOWN_PLAN], [KNOWN_EMAIL, KNOWN_PLAN]),
            ([[KNOWN_EMAIL, UNKNOWN], KNOWN_PLAN], [KNOWN_EMAIL, KNOWN_PLAN]),
            ([[KNOWN_EMAIL, UNKNOWN, KNOWN_PLAN]], [[KNOWN_EMAIL, KNOWN_PLAN]]),
            ([[UNKNOWN], KNOWN_PLAN], [KNOWN_PLAN]),
        ],
    )
    def test_artifacts_identical(self, with_unknown, without_unknown):
        degraded = compile_form(with_unknown, enable_guardrails=False)
        clean = compile_form(without_unknown, enable_guardrails=False)
        assert json.dumps(degraded.schema.to_json_schema()) == json.dumps(clean.schema.to_json_schema())
        assert degraded.defaults == clean.defaults
        assert degraded.code == clean.code
        assert [w.field_name for w in degraded.warnings] == ["stars"]
