"""Discriminated value codec for answer values.

The shape of an answer's `value` depends on the answer's `type`. Once the
outer document has been decoded and its type is known, the raw value
sub-tree is typed here:

- number  -> NumberValue, `amount` tolerant of float/exponential literals
- boolean -> bool, text -> str (false and "" are ordinary values)
- choice / choices -> label(s) plus the normalised `other`
- anything else -> None
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Tuple

from formwire.errors import CoercionFailure, MalformedInput
from formwire.logic.variant_registry import ANSWER_VARIANTS
from formwire.logic.wire_codec import dump_model, load_model, wire_name
from formwire.models.results import ChoicesValue, ChoiceValue, NumberValue
from formwire.models.wire import WireFormat

logger = logging.getLogger(__name__)

_ABSENT = object()


def coerce_other(raw: Any) -> Tuple[str, bool]:
    """Normalise a free-form `other` answer to (other, empty_other).

    Absent or null -> ("", True); string -> verbatim; integer -> decimal text.
    Anything else raises CoercionFailure.
    """
    if raw is _ABSENT or raw is None:
        return "", True
    if isinstance(raw, str):
        return raw, False
    if isinstance(raw, int) and not isinstance(raw, bool):
        return str(raw), False
    raise CoercionFailure(f"other: expected a string or an integer, got {type(raw).__name__}")


def _decode_choice(cls: type, raw: Any, fmt: WireFormat) -> Any:
    if not isinstance(raw, dict):
        raise MalformedInput(f"{cls.__name__}: expected an object, got {type(raw).__name__}")
    other, empty_other = coerce_other(raw.get(wire_name(cls, "other", fmt), _ABSENT))
    if fmt is WireFormat.BINARY and raw.get(wire_name(cls, "empty_other", fmt)) is True:
        other, empty_other = "", True
    return load_model(cls, raw, fmt, other=other, empty_other=empty_other)


def _decode_number(cls: type, raw: Any, fmt: WireFormat) -> Any:
    return load_model(cls, raw, fmt)


def _decode_text(cls: type, raw: Any, fmt: WireFormat) -> Any:
    if not isinstance(raw, str):
        raise MalformedInput(f"text: expected a string, got {type(raw).__name__}")
    return raw


def _decode_boolean(cls: type, raw: Any, fmt: WireFormat) -> Any:
    if not isinstance(raw, bool):
        raise MalformedInput(f"boolean: expected true or false, got {type(raw).__name__}")
    return raw


_DECODERS: Dict[type, Callable[[type, Any, WireFormat], Any]] = {
    NumberValue: _decode_number,
    ChoiceValue: _decode_choice,
    ChoicesValue: _decode_choice,
    str: _decode_text,
    bool: _decode_boolean,
}


def decode_value(type_tag: str, raw: Any, fmt: WireFormat) -> Any:
    """Type a raw answer value according to its answer's type tag."""
    cls = ANSWER_VARIANTS.resolve(type_tag)
    if cls is None:
        logger.debug("value_codec.unknown_answer_type", extra={"type": type_tag})
        return None
    if raw is None:
        # null decodes to the variant's zero value
        raw = {} if cls not in (str, bool) else cls()
    return _DECODERS[cls](cls, raw, fmt)


def encode_value(value: Any, fmt: WireFormat) -> Any:
    if value is None or isinstance(value, (str, bool)):
        return value
    if isinstance(value, (NumberValue, ChoiceValue, ChoicesValue)):
        return dump_model(value, fmt)
    raise TypeError(f"cannot encode answer value of type {type(value).__name__}")


__all__ = ["coerce_other", "decode_value", "encode_value"]
