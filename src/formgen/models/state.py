"""
Live-preview state.

Each field rendered in a preview owns a FieldState: a set of named
transient slots (text value, picked date, selected values, ...) with
setters. The StateBag holds one FieldState per field name together with
the form values the controls write into.
"""

import datetime as dt
from dataclasses import dataclass, field, replace
from typing import Any, Callable

from formgen.models.field_definitions import UploadedFile

# (field name, slot or "form", new value)
StateListener = Callable[[str, str, Any], None]


@dataclass(frozen=True)
class SignaturePad:
    """Handle to the drawing surface behind a Signature Input."""

    width: int = 400
    height: int = 200
    data_url: str = ""

    @property
    def is_empty(self) -> bool:
        return not self.data_url

    def loaded(self, data_url: str | None) -> "SignaturePad":
        return replace(self, data_url=data_url or "")

    def cleared(self) -> "SignaturePad":
        return replace(self, data_url="")


@dataclass
class FieldState:
    """Transient UI state of one field."""

    name: str
    value: str = ""
    date: dt.date | None = None
    datetime: dt.datetime | None = None
    selected: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    files: list[UploadedFile] | None = None
    checked: bool = False
    country: str = ""
    state: str = ""
    canvas: SignaturePad = field(default_factory=SignaturePad)

    _listener: StateListener | None = field(default=None, repr=False, compare=False)

    SLOTS = (
        "value",
        "date",
        "datetime",
        "selected",
        "tags",
        "files",
        "checked",
        "country",
        "state",
        "canvas",
    )

    def set(self, slot: str, value: Any) -> None:
        if slot not in self.SLOTS:
            raise AttributeError(f"FieldState has no slot '{slot}'")
        setattr(self, slot, value)
        if self._listener is not None:
            self._listener(self.name, slot, value)

    def setter(self, slot: str) -> Callable[[Any], None]:
        """Return a one-argument setter bound to `slot`."""
        if slot not in self.SLOTS:
            raise AttributeError(f"FieldState has no slot '{slot}'")
        return lambda value: self.set(slot, value)

    def snapshot(self, slots: tuple[str, ...] | None = None) -> dict[str, Any]:
        return {slot: getattr(self, slot) for slot in (slots or self.SLOTS)}


class StateBag:
    """
    Field states and form values for one preview session.

    States are created on first access and keyed by field name, so two
    fields of the same variant never share state.
    """

    def __init__(self, values: dict[str, Any] | None = None):
        self.values: dict[str, Any] = dict(values or {})
        self._states: dict[str, FieldState] = {}
        self._subscribers: list[StateListener] = []

    @classmethod
    def for_form(cls, form: Any, registry: Any = None) -> "StateBag":
        """Bag seeded from the synthesized defaults of `form`."""
        from formgen.preview.renderer import seed_state_bag

        return seed_state_bag(form, registry)

    def state_for(self, name: str) -> FieldState:
        state = self._states.get(name)
        if state is None:
            state = FieldState(name=name, _listener=self._notify)
            self._states[name] = state
        return state

    def __getitem__(self, name: str) -> FieldState:
        return self.state_for(name)

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __iter__(self):
        return iter(self._states.values())

    def write(self, name: str, value: Any) -> None:
        """Set the form value bound to field `name`."""
        self.values[name] = value
        self._notify(name, "form", value)

    def subscribe(self, callback: StateListener) -> Callable[[], None]:
        """Register a change callback; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, name: str, slot: str, value: Any) -> None:
        for callback in list(self._subscribers):
            callback(name, slot, value)
