"""
Variant registry for formgen.

Maps each field variant to its validator, default and control rules.
"""

from formgen.variants.controls import (
    ComponentImport,
    ControlContext,
    ControlRule,
    StateHook,
)
from formgen.variants.registry import (
    VariantRegistry,
    build_registry,
    default_registry,
)
from formgen.variants.rules import VariantRule
from formgen.variants.validators import ValidatorRule, ValueKind

__all__ = [
    "ComponentImport",
    "ControlContext",
    "ControlRule",
    "StateHook",
    "ValidatorRule",
    "ValueKind",
    "VariantRegistry",
    "VariantRule",
    "build_registry",
    "default_registry",
]
