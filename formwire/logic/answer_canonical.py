"""Canonical string rendering for answer values.

Used by `ResultsAnswer.__str__` to give every answer variant a stable,
human-readable form.
"""

from __future__ import annotations

import logging
from typing import Any

from formwire.models.results import ChoicesValue, ChoiceValue, NumberValue

logger = logging.getLogger(__name__)


def canonicalize_answer_value(value: Any) -> str:
    """Return a stable string representation of an answer value.

    - None     -> ""
    - Booleans -> "true" / "false"
    - Numbers  -> decimal integer
    - Text     -> as-is
    - Choice   -> `other` when one was given, else the label
    - Choices  -> `other` when one was given, else labels joined by ","
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, NumberValue):
        return str(value.amount)
    if isinstance(value, ChoiceValue):
        return value.label if value.empty_other else value.other
    if isinstance(value, ChoicesValue):
        return ",".join(value.labels) if value.empty_other else value.other
    logger.error("answer_canonical.unknown_value_type", extra={"value_type": type(value).__name__})
    return ""


__all__ = ["canonicalize_answer_value"]
