"""Raw document handling shared by the decoder and encoder.

`parse` turns raw bytes into an untyped tree exactly once; the two decode
passes then type that same tree. `load_model` and `dump_model` translate
between trees and models by reading the `WireKey` attached to each model
attribute, so no model carries format-specific hooks of its own.

Text format: JSON, floats kept as `Decimal` so integer attributes sent in
exponential notation resolve exactly. Binary format: MessagePack via msgspec.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from functools import lru_cache
from typing import Any, Dict, List, Mapping, Optional, Tuple, get_args, get_origin

import msgspec
from pydantic import BaseModel, ValidationError

from formwire.errors import MalformedInput
from formwire.models.wire import WireFormat, WireKey

logger = logging.getLogger(__name__)

_MSGPACK_DECODER = msgspec.msgpack.Decoder()
_MSGPACK_ENCODER = msgspec.msgpack.Encoder()


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not a valid JSON number")


def parse(raw: bytes | bytearray | memoryview | str, fmt: WireFormat) -> Any:
    """Parse a complete raw document into an untyped tree."""
    if fmt is WireFormat.JSON:
        if isinstance(raw, memoryview):
            raw = raw.tobytes()
        try:
            return json.loads(raw, parse_float=Decimal, parse_constant=_reject_constant)
        except (ValueError, TypeError) as exc:
            raise MalformedInput(f"invalid JSON document: {exc}") from exc
    try:
        return _MSGPACK_DECODER.decode(raw)
    except (msgspec.DecodeError, TypeError) as exc:
        raise MalformedInput(f"invalid binary document: {exc}") from exc


def _json_default(obj: object) -> object:
    if isinstance(obj, Decimal):
        return int(obj) if obj == obj.to_integral_value() else float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def serialize(tree: Any, fmt: WireFormat) -> bytes:
    if fmt is WireFormat.JSON:
        return json.dumps(
            tree, separators=(",", ":"), ensure_ascii=False, default=_json_default
        ).encode("utf-8")
    return _MSGPACK_ENCODER.encode(tree)


@lru_cache(maxsize=None)
def wire_keys(model_cls: type, fmt: WireFormat) -> Tuple[Tuple[str, str, WireKey], ...]:
    """Return (attribute, wire name, key) for every attribute carried in `fmt`."""
    entries: List[Tuple[str, str, WireKey]] = []
    for name, info in model_cls.model_fields.items():
        key = next((m for m in info.metadata if isinstance(m, WireKey)), None)
        if key is None:
            continue
        wire_name = key.name_for(fmt)
        if wire_name is None:
            continue
        entries.append((name, wire_name, key))
    return tuple(entries)


def wire_name(model_cls: type, attr: str, fmt: WireFormat) -> Optional[str]:
    for name, wname, _key in wire_keys(model_cls, fmt):
        if name == attr:
            return wname
    return None


def _nested_model(annotation: Any) -> Tuple[Optional[type], bool]:
    if isinstance(annotation, type) and issubclass(annotation, BaseModel):
        return annotation, False
    if get_origin(annotation) is list:
        args = get_args(annotation)
        if args and isinstance(args[0], type) and issubclass(args[0], BaseModel):
            return args[0], True
    return None, False


def _summarise(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "<root>"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def _plain_floats(raw: Any) -> Any:
    if isinstance(raw, Decimal):
        return float(raw)
    if isinstance(raw, list):
        return [_plain_floats(v) for v in raw]
    if isinstance(raw, dict):
        return {k: _plain_floats(v) for k, v in raw.items()}
    return raw


def _load_attr(annotation: Any, raw: Any, fmt: WireFormat) -> Any:
    if annotation is Any:
        # untyped trees read back the floats a plain JSON parse would give
        return _plain_floats(raw)
    nested, many = _nested_model(annotation)
    if nested is None:
        return raw
    if many:
        if not isinstance(raw, list):
            raise MalformedInput(f"{nested.__name__}: expected an array, got {type(raw).__name__}")
        return [load_model(nested, item, fmt) for item in raw]
    return load_model(nested, raw, fmt)


def load_model(model_cls: type, tree: Any, fmt: WireFormat, **overrides: Any) -> Any:
    """Type `tree` as `model_cls`.

    Wire keys absent from the tree, or set to null, keep the attribute's zero
    value. Keyword overrides supply already-decoded attributes (polymorphic
    collections, discriminated values) and bypass the key table.
    """
    if not isinstance(tree, Mapping):
        raise MalformedInput(f"{model_cls.__name__}: expected an object, got {type(tree).__name__}")
    data: Dict[str, Any] = {}
    for name, wname, _key in wire_keys(model_cls, fmt):
        if name in overrides or wname not in tree:
            continue
        raw = tree[wname]
        if raw is None:
            continue
        data[name] = _load_attr(model_cls.model_fields[name].annotation, raw, fmt)
    data.update(overrides)
    try:
        return model_cls.model_validate(data)
    except ValidationError as exc:
        raise MalformedInput(f"{model_cls.__name__}: {_summarise(exc)}") from exc


def _is_empty(value: Any) -> bool:
    if value is None or value is False:
        return True
    if isinstance(value, (str, list, dict)):
        return not value
    return type(value) is int and value == 0


def dump_value(value: Any, fmt: WireFormat) -> Any:
    if isinstance(value, BaseModel):
        return dump_model(value, fmt)
    if isinstance(value, (list, tuple)):
        return [dump_value(v, fmt) for v in value]
    if isinstance(value, dict):
        return {k: dump_value(v, fmt) for k, v in value.items()}
    return value


def dump_model(model: BaseModel, fmt: WireFormat, **overrides: Any) -> Dict[str, Any]:
    """Build the wire tree for `model` from its own class's key table."""
    out: Dict[str, Any] = {}
    for name, wname, key in wire_keys(type(model), fmt):
        if key.omit_when and getattr(model, key.omit_when):
            continue
        value = overrides[name] if name in overrides else dump_value(getattr(model, name), fmt)
        if key.omit_none and value is None:
            continue
        if key.omits_empty(fmt) and _is_empty(value):
            continue
        out[wname] = value
    return out


__all__ = [
    "parse",
    "serialize",
    "wire_keys",
    "wire_name",
    "load_model",
    "dump_model",
    "dump_value",
]
