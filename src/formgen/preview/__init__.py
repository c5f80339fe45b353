"""
Live preview for formgen.

Dispatches each field to its interactive control, keeps per-field state
and validates the bound values on submit.
"""

from formgen.preview.dispatcher import ControlDescription, dispatch_control
from formgen.preview.renderer import (
    PreviewRow,
    render_preview,
    seed_state_bag,
    submit_preview,
)

__all__ = [
    "ControlDescription",
    "PreviewRow",
    "dispatch_control",
    "render_preview",
    "seed_state_bag",
    "submit_preview",
]
