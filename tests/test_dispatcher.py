"""Tests for the variant dispatcher and live preview."""

from datetime import date, datetime

import pytest

from formgen.models.field_definitions import FieldSpec, UploadedFile, load_form_definition
from formgen.models.state import StateBag
from formgen.preview import dispatch_control, render_preview, seed_state_bag, submit_preview


def control_for(state_bag=None, **field):
    return dispatch_control(FieldSpec.model_validate(field), state_bag or StateBag())


class TestDispatch:
    """Tests for control lookup."""

    def test_input_control(self):
        control = control_for(variant="Input", name="email", type="email", placeholder="you@example.com")
        assert control.component == "Input"
        assert control.variant == "Input"
        assert control.props["type"] == "email"
        assert control.props["placeholder"] == "you@example.com"
        assert control.events == ["change"]
        assert control.slots == ("value",)

    def test_unknown_variant(self):
        assert control_for(variant="Rating", name="stars") is None

    def test_unknown_event(self):
        control = control_for(variant="Input", name="email")
        with pytest.raises(KeyError):
            control.fire("toggle")

    def test_state_is_per_field(self):
        bag = StateBag()
        first = control_for(bag, variant="Input", name="first")
        second = control_for(bag, variant="Input", name="second")
        first.fire("change", "Ada")
        assert first.state.value == "Ada"
        assert second.state.value == ""
        assert bag.values == {"first": "Ada"}


class TestEvents:
    """Tests for event bindings."""

    def test_text_change(self):
        bag = StateBag()
        control = control_for(bag, variant="Textarea", name="bio")
        assert control.fire("change", "hello") == "hello"
        assert bag.values["bio"] == "hello"

    def test_switch_toggle(self):
        bag = StateBag()
        control = control_for(bag, variant="Switch", name="subscribe")
        assert control.fire("toggle") is True
        assert control.fire("toggle") is False
        assert control.fire("change", True) is True
        assert bag.values["subscribe"] is True

    def test_combobox_select(self):
        bag = StateBag()
        control = control_for(bag, variant="Combobox", name="language")
        control.fire("select", "fr")
        assert bag.values["language"] == "fr"
        assert dispatch_control(FieldSpec(variant="Combobox", name="language"), bag).props["selectedLabel"] == "French"

    def test_multi_select(self):
        bag = StateBag()
        control = control_for(bag, variant="Multi Select", name="fw", options=["a", "b"])
        assert control.fire("change", ["a", "b"]) == ["a", "b"]
        assert control.state.selected == ["a", "b"]

    def test_date_select(self):
        bag = StateBag()
        control = control_for(bag, variant="Date Picker", name="birthday")
        assert control.fire("select", "2000-02-29") == date(2000, 2, 29)
        assert control.state.date == date(2000, 2, 29)

    def test_date_ignores_malformed_and_clears(self):
        bag = StateBag()
        control = control_for(bag, variant="Date Picker", name="birthday")
        control.fire("select", "2000-02-29")
        assert control.fire("select", "not a date") == date(2000, 2, 29)
        assert control.state.date == date(2000, 2, 29)
        assert control.fire("select", None) is None
        assert control.state.date is None
        assert bag.values["birthday"] is None

    def test_datetime_clears_on_empty(self):
        bag = StateBag()
        control = control_for(bag, variant="Datetime Picker", name="meeting")
        picked = datetime(2024, 5, 1, 10, 30)
        assert control.fire("change", picked) == picked
        assert control.fire("change", "someday") == picked
        assert bag.values["meeting"] == picked
        assert control.fire("change", None) is None
        assert control.state.datetime is None
        assert bag.values["meeting"] is None

    def test_files(self):
        bag = StateBag()
        control = control_for(bag, variant="File Input", name="documents")
        files = control.fire("change", [{"name": "a.pdf", "size": 10, "type": "application/pdf"}])
        assert files == [UploadedFile(name="a.pdf", size=10, content_type="application/pdf")]
        assert control.state.files == files
        control.fire("change", [])
        assert control.state.files is None

    def test_slider(self):
        bag = StateBag()
        control = control_for(bag, variant="Slider", name="price", min=0, max=1000)
        assert control.fire("change", [250]) == 250
        assert control.state.value == "250"
        assert bag.values["price"] == 250

    def test_slider_ignores_non_numbers(self):
        bag = StateBag()
        control = control_for(bag, variant="Slider", name="price")
        control.fire("change", [40])
        assert control.fire("change", "lots") == 40
        assert control.fire("change", [True]) == 40
        assert control.state.value == "40"
        assert bag.values["price"] == 40

    def test_signature(self):
        bag = StateBag()
        control = control_for(bag, variant="Signature Input", name="signature")
        control.fire("change", "data:image/png;base64,AAAA")
        assert not control.state.canvas.is_empty
        assert bag.values["signature"] == "data:image/png;base64,AAAA"

    def test_location(self):
        bag = StateBag()
        control = control_for(bag, variant="Location Input", name="location")
        assert control.fire("country", {"name": "Turkey"}) == ["Turkey", ""]
        assert control.fire("state", "Istanbul") == ["Turkey", "Istanbul"]
        assert bag.values["location"] == ["Turkey", "Istanbul"]

    def test_subscribers_see_slot_and_form_updates(self):
        bag = StateBag()
        seen = []
        bag.subscribe(lambda name, slot, value: seen.append((name, slot)))
        control_for(bag, variant="Input", name="email").fire("change", "x")
        assert seen == [("email", "value"), ("email", "form")]


class TestProps:
    """Tests for props builders."""

    def test_slider_fallbacks(self):
        props = control_for(variant="Slider", name="volume").props
        assert (props["min"], props["max"], props["step"]) == (0, 100, 1)
        assert props["value"] == [0]

    def test_phone_default_country(self):
        assert control_for(variant="Phone", name="phone").props["defaultCountry"] == "TR"

    def test_otp_slot_groups(self):
        props = control_for(variant="Input OTP", name="code").props
        assert props["maxLength"] == 6
        assert props["slotGroups"] == [[0, 1, 2], [3, 4, 5]]

    def test_date_bounds(self):
        props = control_for(variant="Date Picker", name="d").props
        assert props["fromDate"] == "1900-01-01"
        assert props["toDate"] is None

    def test_file_limits(self):
        options = control_for(variant="File Input", name="docs").props["dropzoneOptions"]
        assert options == {"maxFiles": 5, "maxSize": 4 * 1024 * 1024, "multiple": True}


class TestPreview:
    """Tests for rendering and submitting a preview."""

    FORM = [
        [
            {"variant": "Input", "name": "email", "type": "email", "required": True},
            {"variant": "Switch", "name": "subscribe", "checked": True},
        ],
        {"variant": "Slider", "name": "price", "min": 10, "max": 500},
        {"variant": "Rating", "name": "stars"},
    ]

    def test_seeded_state(self):
        bag = seed_state_bag(self.FORM)
        assert bag.values == {"email": "", "subscribe": True, "price": 10}
        assert bag["subscribe"].checked is True
        assert bag["price"].value == "10"

    def test_for_form(self):
        bag = StateBag.for_form(self.FORM)
        assert set(bag.values) == {"email", "subscribe", "price"}

    def test_rows(self):
        bag = seed_state_bag(self.FORM)
        rows = render_preview(load_form_definition(self.FORM), bag)
        assert [row.span for row in rows] == [6, 12]
        assert [c.name for c in rows[0].controls] == ["email", "subscribe"]

    def test_submit(self):
        form = load_form_definition(self.FORM)
        bag = seed_state_bag(form)
        assert not submit_preview(form, bag).is_valid

        rows = render_preview(form, bag)
        rows[0].controls[0].fire("change", "ada@example.com")
        result = submit_preview(form, bag)
        assert result.is_valid
        assert result.validated_data["email"] == "ada@example.com"
        assert result.validated_data["subscribe"] is True

    def test_rows_follow_name_collision(self):
        form = load_form_definition([
            [{"variant": "Input", "name": "a"}, {"variant": "Input", "name": "b"}],
            {"variant": "Switch", "name": "a"},
        ])
        rows = render_preview(form, seed_state_bag(form))
        assert [[c.name for c in row.controls] for row in rows] == [["b"], ["a"]]
        assert [row.span for row in rows] == [12, 12]
        assert rows[1].controls[0].variant == "Switch"
