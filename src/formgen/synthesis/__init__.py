"""
Synthesizers for formgen.

Each synthesizer is a pure function of a form definition:
- synthesize_schema: validation schema
- synthesize_defaults: initial values
- synthesize_code: formatted TSX component source
"""

from formgen.synthesis.code import synthesize_code
from formgen.synthesis.defaults import synthesize_defaults
from formgen.synthesis.formatter import format_source
from formgen.synthesis.resolve import Resolution, ResolvedField, resolve_form
from formgen.synthesis.schema import synthesize_schema

__all__ = [
    "Resolution",
    "ResolvedField",
    "format_source",
    "resolve_form",
    "synthesize_code",
    "synthesize_defaults",
    "synthesize_schema",
]
