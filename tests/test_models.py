"""Tests for formgen data models."""

import json

import pytest

from formgen.exceptions import InvalidFormDefinition, NameCollision
from formgen.models.field_definitions import (
    FieldSpec,
    FormDefinition,
    UploadedFile,
    Variant,
    column_span,
    load_form_definition,
    variant_for_editor_type,
    variant_key,
)
from formgen.models.state import FieldState, SignaturePad, StateBag
from formgen.models.validation_result import (
    FieldValidationError,
    SynthesisWarning,
    ValidationResult,
    WarningKind,
)


class TestFieldSpec:
    """Tests for FieldSpec model."""

    def test_basic_field(self):
        field = FieldSpec(variant="Input", name="email")
        assert field.name == "email"
        assert field.required is False
        assert field.label == ""
        assert field.options is None

    def test_camel_case_keys(self):
        field = FieldSpec.model_validate({
            "variant": "Textarea",
            "name": "bio",
            "maxLength": 200,
            "defaultValue": "hi",
            "rowIndex": 3,
        })
        assert field.max_length == 200
        assert field.default_value == "hi"
        assert field.row_index == 3

    def test_unknown_keys_ignored(self):
        field = FieldSpec.model_validate({"variant": "Input", "name": "x", "className": "w-full"})
        assert not hasattr(field, "className")

    def test_string_options_coerced(self):
        field = FieldSpec(variant="Select", name="plan", options=["free", "pro"])
        assert [o.value for o in field.options] == ["free", "pro"]
        assert field.options[0].label == "free"

    def test_initial_value_prefers_default_value(self):
        field = FieldSpec.model_validate({"variant": "Input", "name": "x", "value": "a", "defaultValue": "b"})
        assert field.initial_value == "b"

        field = FieldSpec(variant="Input", name="x", value="a")
        assert field.initial_value == "a"


class TestVariantNames:
    """Tests for variant spelling normalization."""

    def test_variant_key(self):
        assert variant_key("Date Picker") == "datepicker"
        assert variant_key("date-picker") == "datepicker"
        assert variant_key("DATE_PICKER") == "datepicker"

    def test_editor_types(self):
        assert variant_for_editor_type("email") == Variant.INPUT.value
        assert variant_for_editor_type("date") == Variant.DATE_PICKER.value
        assert variant_for_editor_type("checkbox") == Variant.CHECKBOX.value
        assert variant_for_editor_type("multi-select") == Variant.MULTI_SELECT.value
        assert variant_for_editor_type("input-otp") == Variant.INPUT_OTP.value

    def test_unknown_editor_type_passes_through(self):
        assert variant_for_editor_type("rating") == "Rating"


class TestFormDefinition:
    """Tests for FormDefinition and loading."""

    def test_groups_and_flatten(self):
        form = load_form_definition([
            [{"variant": "Input", "name": "first"}, {"variant": "Input", "name": "last"}],
            {"variant": "Switch", "name": "subscribe"},
        ])
        assert [len(g) for g in form.groups()] == [2, 1]
        assert [f.name for f in form.flatten()] == ["first", "last", "subscribe"]

    def test_empty_group_skipped(self):
        form = load_form_definition([[], {"variant": "Input", "name": "a"}])
        assert len(form.groups()) == 1

    def test_load_from_json_text(self):
        text = json.dumps({"fields": [{"variant": "Input", "name": "email"}]})
        form = load_form_definition(text)
        assert form.flatten()[0].name == "email"

    def test_load_editor_types(self):
        form = load_form_definition({"fields": [
            {"type": "email", "name": "email"},
            {"type": "date", "name": "birthday"},
        ]})
        email, birthday = form.flatten()
        assert email.variant == "Input"
        assert email.type == "email"
        assert birthday.variant == "Date Picker"
        assert birthday.type is None

    def test_load_passes_form_definition_through(self):
        form = FormDefinition(fields=[])
        assert load_form_definition(form) is form

    def test_invalid_json(self):
        with pytest.raises(InvalidFormDefinition):
            load_form_definition("{not json")

    def test_invalid_shape(self):
        with pytest.raises(InvalidFormDefinition):
            load_form_definition(42)
        with pytest.raises(InvalidFormDefinition):
            load_form_definition({"fields": "email"})

    def test_field_without_name(self):
        with pytest.raises(InvalidFormDefinition):
            load_form_definition([{"variant": "Input"}])

    def test_column_span(self):
        assert column_span(1) == 12
        assert column_span(2) == 6
        assert column_span(3) == 4
        assert column_span(4) == 3
        assert column_span(6) == 3


class TestUploadedFile:
    """Tests for UploadedFile model."""

    def test_type_alias(self):
        file = UploadedFile.model_validate({"name": "a.pdf", "size": 10, "type": "application/pdf"})
        assert file.content_type == "application/pdf"

    def test_negative_size(self):
        with pytest.raises(ValueError):
            UploadedFile(name="a", size=-1)


class TestFieldState:
    """Tests for preview state."""

    def test_set_notifies(self):
        seen = []
        state = FieldState(name="email", _listener=lambda *args: seen.append(args))
        state.set("value", "hi")
        assert state.value == "hi"
        assert seen == [("email", "value", "hi")]

    def test_unknown_slot(self):
        state = FieldState(name="email")
        with pytest.raises(AttributeError):
            state.set("colour", "red")
        with pytest.raises(AttributeError):
            state.setter("colour")

    def test_setter(self):
        state = FieldState(name="tags")
        state.setter("tags")(["a"])
        assert state.tags == ["a"]

    def test_signature_pad(self):
        pad = SignaturePad()
        assert pad.is_empty
        loaded = pad.loaded("data:image/png;base64,AAAA")
        assert not loaded.is_empty
        assert loaded.cleared().is_empty


class TestStateBag:
    """Tests for StateBag."""

    def test_states_are_per_field(self):
        bag = StateBag()
        bag.state_for("a").set("value", "1")
        assert bag["b"].value == ""
        assert "a" in bag and "b" in bag

    def test_write_and_subscribe(self):
        bag = StateBag()
        seen = []
        unsubscribe = bag.subscribe(lambda *args: seen.append(args))
        bag.write("email", "x")
        unsubscribe()
        bag.write("email", "y")
        assert bag.values == {"email": "y"}
        assert seen == [("email", "form", "x")]


class TestValidationResult:
    """Tests for ValidationResult model."""

    def test_error_dict(self):
        result = ValidationResult(
            is_valid=False,
            errors=[
                FieldValidationError(field_name="email", error_type="missing", message="Field required"),
                FieldValidationError(field_name="email", error_type="string_too_short", message="Too short"),
            ],
        )
        assert result.error_count == 2
        assert result.to_error_dict() == {"email": ["Field required", "Too short"]}
        assert len(result.get_field_errors("email")) == 2


class TestSynthesisWarning:
    """Tests for SynthesisWarning."""

    def test_from_error(self):
        warning = SynthesisWarning.from_error(NameCollision("Duplicate", field="email"))
        assert warning.kind == WarningKind.NAME_COLLISION
        assert warning.field_name == "email"
        assert str(warning) == "[name_collision] email: Duplicate"
