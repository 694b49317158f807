"""Error hierarchy shared by the codec and its collaborators."""

from __future__ import annotations

from typing import List, Tuple


class FormwireError(Exception):
    pass


class MalformedInput(FormwireError, ValueError):
    """Raw bytes do not parse, or an attribute has the wrong structural shape."""


class CoercionFailure(MalformedInput):
    """A flexible-type coercion exhausted every accepted representation."""


class FormValidationError(FormwireError, ValueError):
    """A decoded Form violates one or more field-level rules."""

    def __init__(self, problems: List[Tuple[str, str]]):
        self.problems = list(problems)
        summary = "; ".join(f"{path}: {msg}" for path, msg in self.problems)
        super().__init__(summary or "form is invalid")


class EmptyTokenError(FormwireError):
    def __init__(self) -> None:
        super().__init__("empty API token")


class UnexpectedResponseError(FormwireError):
    pass


class ApiError(FormwireError):
    """Per-field error returned by the forms API."""

    def __init__(self, error_type: str, field: str, description: str):
        self.error_type = error_type
        self.field = field
        self.description = description
        super().__init__(f"{error_type} on field {field}: {description}")


__all__ = [
    "FormwireError",
    "MalformedInput",
    "CoercionFailure",
    "FormValidationError",
    "EmptyTokenError",
    "UnexpectedResponseError",
    "ApiError",
]
