"""
Variant dispatcher.

Maps a field to the live control that renders it during preview and
wires the control's events to the field's own state and to the bound
form values.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from formgen.exceptions import UnknownVariant
from formgen.models.field_definitions import FieldSpec
from formgen.models.state import FieldState, StateBag
from formgen.synthesis.resolve import ResolvedField, resolve_field
from formgen.variants.controls import UNCHANGED, EventBinding
from formgen.variants.registry import VariantRegistry, default_registry

logger = logging.getLogger(__name__)


@dataclass
class ControlDescription:
    """A live control: component, props, state and event handlers."""

    name: str
    variant: str
    component: str
    props: dict[str, Any]
    state: FieldState
    handlers: dict[str, Callable[[Any], Any]] = field(default_factory=dict)
    slots: tuple[str, ...] = ()

    @property
    def events(self) -> list[str]:
        return sorted(self.handlers)

    def fire(self, event: str, payload: Any = None) -> Any:
        """
        Simulate a UI event.

        Returns the value written into the bound form data.

        Raises:
            KeyError: If the control has no handler for `event`.
        """
        handler = self.handlers.get(event)
        if handler is None:
            raise KeyError(f"Control '{self.component}' for '{self.name}' has no '{event}' event")
        return handler(payload)


def _bind(binding: EventBinding, state: FieldState, state_bag: StateBag, name: str) -> Callable[[Any], Any]:
    def handler(payload: Any = None) -> Any:
        value = binding(state, payload)
        if value is UNCHANGED:
            return state_bag.values.get(name)
        state_bag.write(name, value)
        return value

    return handler


def control_for_resolved(resolved: ResolvedField, state_bag: StateBag) -> ControlDescription:
    """Describe the live control for a field already paired with its rule."""
    spec = resolved.spec
    control = resolved.rule.control
    state = state_bag.state_for(spec.name)
    return ControlDescription(
        name=spec.name,
        variant=resolved.rule.variant.value,
        component=control.component,
        props=control.props(spec, state, resolved.context),
        state=state,
        handlers={
            event: _bind(binding, state, state_bag, spec.name)
            for event, binding in control.events.items()
        },
        slots=control.slots,
    )


def dispatch_control(
    spec: FieldSpec,
    state_bag: StateBag,
    registry: VariantRegistry | None = None,
) -> ControlDescription | None:
    """
    Describe the live control for one field.

    Returns None for fields whose variant is not registered.
    """
    registry = registry or default_registry()
    try:
        resolved = resolve_field(spec, registry)
    except UnknownVariant as e:
        logger.debug(f"No control for field: {e}")
        return None
    return control_for_resolved(resolved, state_bag)
