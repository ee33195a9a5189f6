"""Validation error type and the signature of field validation functions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, List


@dataclass
class ValidationError(Exception):
    """A single validation failure: what went wrong, where, and with which value."""

    message: str = ""
    location: str = ""
    value: Any = None

    def __str__(self) -> str:
        if not self.location and self.value is None:
            return self.message
        return f"{self.message} ({self.location}: {_format_value(self.value)})"


def _format_value(value: Any) -> str:
    return "<nil>" if value is None else str(value)


# A field validation function takes a context, a helper and the value to check,
# and returns the errors it found (an empty list when the value is valid).
FieldValidationFn = Callable[[Any, Any, Any], List[ValidationError]]