"""
Exceptions for the formgen compiler.

Most of these describe caller input problems that the synthesizers
tolerate: they are raised at the point of detection, caught by the
field resolver and surfaced as warnings. Only FormattingError (and
InvalidFormDefinition at the loading boundary) reach the caller.
"""

from typing import Optional


class FormGenError(Exception):
    """Base exception for all formgen errors."""

    def __init__(self, message: str, field: Optional[str] = None):
        self.message = message
        self.field = field

        error_parts = [message]
        if field is not None:
            error_parts.append(f"Field: {field}")

        super().__init__(" | ".join(error_parts))


class UnknownVariant(FormGenError, KeyError):
    """Raised when a field's variant is not in the variant registry."""

    def __init__(self, variant: str, field: Optional[str] = None):
        self.variant = variant
        super().__init__(f"Unknown variant '{variant}'", field=field)

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message
        return Exception.__str__(self)


class NameCollision(FormGenError):
    """Raised when two fields in one form share a name."""


class MalformedOptions(FormGenError):
    """Raised when a choice variant has no options to choose from."""


class InvalidFormDefinition(FormGenError):
    """Raised when input cannot be read as a form definition at all."""


class FormattingError(FormGenError):
    """Raised when generated source text is structurally malformed."""

    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
