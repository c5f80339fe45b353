"""
Constants for guardrails in formgen.

This module contains the patterns and limits used by the guardrail
system. Centralizing these makes them easier to maintain and update.
"""

import re

# Patterns that might indicate injection attempts in display strings
SUSPICIOUS_PATTERNS = [
    r"<script",
    r"javascript:",
    r"on\w+\s*=",
    r"\{\{.*\}\}",
    r"\$\{.*\}",
    r"eval\s*\(",
    r"__proto__",
    r"dangerouslySetInnerHTML",
]

# Valid field name pattern (alphanumeric + underscore)
VALID_FIELD_NAME = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")

MAX_FIELD_NAME_LENGTH = 100

# Rows wider than this no longer fit a 12-column grid at a readable width
MAX_GROUP_SIZE = 4

VALID_JSON_TYPES = {"string", "number", "integer", "boolean", "array", "object", "null"}
