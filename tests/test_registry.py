"""Tests for the variant registry."""

import logging

import pytest

from formgen.config import FormGenConfig, get_config, update_config
from formgen.exceptions import UnknownVariant
from formgen.models.field_definitions import FieldSpec, Variant, load_form_definition
from formgen.synthesis.schema import synthesize_schema
from formgen.variants import ValueKind, build_registry, default_registry


class TestLookup:
    """Tests for variant lookup."""

    def test_every_variant_registered(self):
        registry = default_registry()
        assert len(registry) == len(Variant)
        assert registry.variants() == list(Variant)

    @pytest.mark.parametrize("spelling", ["Date Picker", "DatePicker", "date-picker", "date_picker"])
    def test_lookup_normalizes_spelling(self, spelling):
        assert default_registry().lookup(spelling).variant == Variant.DATE_PICKER

    def test_contains(self):
        registry = default_registry()
        assert "multi select" in registry
        assert "Rating" not in registry
        assert 3 not in registry

    def test_unknown_variant(self):
        with pytest.raises(UnknownVariant) as excinfo:
            default_registry().lookup("Rating")
        assert excinfo.value.variant == "Rating"
        assert str(excinfo.value) == "Unknown variant 'Rating'"

    def test_unknown_variant_is_key_error(self):
        with pytest.raises(KeyError):
            default_registry().lookup("Rating")

    def test_rule_for_attaches_field_name(self):
        spec = FieldSpec(variant="Rating", name="stars")
        with pytest.raises(UnknownVariant) as excinfo:
            default_registry().rule_for(spec)
        assert excinfo.value.field == "stars"


class TestRules:
    """Tests for the rule table."""

    def test_value_kinds(self):
        registry = default_registry()
        assert registry.lookup("Switch").value_kind == ValueKind.BOOLEAN
        assert registry.lookup("Tags Input").value_kind == ValueKind.STRING_LIST
        assert registry.lookup("Multi Select").value_kind == ValueKind.MULTI_CHOICE
        assert registry.lookup("Slider").value_kind == ValueKind.NUMBER
        assert registry.lookup("Location Input").value_kind == ValueKind.LOCATION

    def test_choice_variants_need_options(self):
        registry = default_registry()
        needing = {rule.variant for rule in registry if rule.needs_options}
        assert needing == {Variant.SELECT, Variant.MULTI_SELECT, Variant.COMBOBOX}

    def test_combobox_falls_back_to_catalog(self):
        rule = default_registry().lookup("Combobox")
        spec = FieldSpec(variant="Combobox", name="language")
        values = [o.value for o in rule.options_for(spec)]
        assert values[:3] == ["en", "fr", "de"]

    def test_own_options_win(self):
        rule = default_registry().lookup("Combobox")
        spec = FieldSpec(variant="Combobox", name="color", options=["red"])
        assert [o.value for o in rule.options_for(spec)] == ["red"]

    def test_describe(self):
        catalog = default_registry().describe()
        assert len(catalog) == len(Variant)
        slider = next(entry for entry in catalog if entry["variant"] == "Slider")
        assert slider["component"] == "Slider"
        assert slider["value_kind"] == "number"
        assert slider["events"] == ["change"]
        assert slider["example"]["variant"] == "Slider"


class TestBuildRegistry:
    """Tests for custom registries."""

    def test_custom_catalog(self):
        registry = build_registry(catalogs={"Select": ["a", {"label": "B", "value": "b"}]})
        spec = FieldSpec(variant="Select", name="letter")
        assert [o.value for o in registry.lookup("Select").options_for(spec)] == ["a", "b"]
        # Replacing the catalogs drops the default Combobox catalog
        assert registry.lookup("Combobox").options_catalog == ()

    def test_catalog_for_variant_without_options(self, caplog):
        with caplog.at_level(logging.WARNING):
            registry = build_registry(catalogs={"Input": ["a"]})
        assert registry.lookup("Input").options_catalog == ()
        assert "ignored" in caplog.text

    def test_unknown_catalog_variant(self):
        with pytest.raises(UnknownVariant):
            build_registry(catalogs={"Rating": ["1"]})

    def test_config_limits(self):
        config = FormGenConfig(file_max_count=2, otp_default_length=4, default_phone_country="US")
        registry = build_registry(config=config)
        assert registry.context.file_max_count == 2
        assert registry.context.otp_length == 4
        assert registry.context.default_phone_country == "US"


class TestDefaultRegistry:
    """The shared registry follows configuration updates."""

    SMALL = {"name": "a.pdf", "size": 1024, "type": "application/pdf"}

    def test_cached_while_settings_unchanged(self):
        assert default_registry() is default_registry()

    def test_update_config_applies_to_synthesis(self):
        form = load_form_definition([{"variant": "File Input", "name": "documents"}])
        assert synthesize_schema(form).is_valid({"documents": [self.SMALL] * 2})
        original = get_config().file_max_count
        update_config(file_max_count=1)
        try:
            schema = synthesize_schema(form)
            assert not schema.is_valid({"documents": [self.SMALL] * 2})
            assert schema.is_valid({"documents": [self.SMALL]})
        finally:
            update_config(file_max_count=original)
        assert default_registry().context.file_max_count == original

    def test_catalog_update_applies(self):
        original = get_config().combobox_options
        update_config(combobox_options=[{"label": "Dutch", "value": "nl"}])
        try:
            options = default_registry().lookup("Combobox").options_catalog
        finally:
            update_config(combobox_options=original)
        assert [option.value for option in options] == ["nl"]
