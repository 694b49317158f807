"""Two-pass decoding of tagged documents into concrete variants.

A field's concrete class is only known once its `type` tag has been read,
but the tag lives inside the document being decoded. Each document is
therefore parsed once into an untyped tree and typed twice:

1. load the tree as the base shape to read the discriminator;
2. resolve the concrete class from the variant registry;
3. load the same tree again as that class.

Answers apply the pattern one level down: the outer document is typed once
as metadata and only its `value` sub-tree is typed by the value codec.

Collections decode element-wise and fail as a whole on the first bad element.
Answers are always re-sorted by `field_id` after decoding.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping

from formwire.errors import MalformedInput
from formwire.logic.value_codec import decode_value
from formwire.logic.variant_registry import ANSWER_VARIANTS, field_variants
from formwire.logic.wire_codec import load_model, parse, wire_name
from formwire.models.fields import Field, Form
from formwire.models.results import Results, ResultsAnswer
from formwire.models.wire import WireFormat

logger = logging.getLogger(__name__)


def decode_field(tree: Any, fmt: WireFormat) -> Field:
    """Decode one field tree into its concrete Field variant."""
    meta = load_model(Field, tree, fmt)
    cls = field_variants(fmt).resolve(meta.type)
    if cls is Field:
        logger.info("decoder.unknown_field_type", extra={"field_type": meta.type, "format": fmt.value})
        return meta
    return load_model(cls, tree, fmt)


def decode_answer(tree: Any, fmt: WireFormat) -> ResultsAnswer:
    """Decode one answer tree; `value` is typed according to `type`."""
    meta = load_model(ResultsAnswer, tree, fmt, value=None)
    if meta.type not in ANSWER_VARIANTS:
        logger.info("decoder.unknown_answer_type", extra={"answer_type": meta.type, "field_id": meta.field_id})
    value = decode_value(meta.type, tree.get(wire_name(ResultsAnswer, "value", fmt)), fmt)
    return meta.model_copy(update={"value": value})


def decode_field_document(raw: bytes, fmt: WireFormat) -> Field:
    return decode_field(parse(raw, fmt), fmt)


def decode_answer_document(raw: bytes, fmt: WireFormat) -> ResultsAnswer:
    return decode_answer(parse(raw, fmt), fmt)


def _decode_list(raw_list: Any, what: str, decode_one, fmt: WireFormat) -> list:
    if raw_list is None:
        return []
    if not isinstance(raw_list, list):
        raise MalformedInput(f"{what}: expected an array, got {type(raw_list).__name__}")
    out = []
    for index, item in enumerate(raw_list):
        try:
            out.append(decode_one(item, fmt))
        except MalformedInput as exc:
            raise type(exc)(f"{what}[{index}]: {exc}") from exc
    return out


def decode_fields(raw_list: Any, fmt: WireFormat) -> List[Field]:
    return _decode_list(raw_list, "fields", decode_field, fmt)


def sort_answers(answers: List[ResultsAnswer]) -> List[ResultsAnswer]:
    """Stable sort ascending by field_id; ties keep their original order."""
    return sorted(answers, key=lambda answer: answer.field_id)


def decode_answers(raw_list: Any, fmt: WireFormat) -> List[ResultsAnswer]:
    return sort_answers(_decode_list(raw_list, "answers", decode_answer, fmt))


def _document(raw: bytes, fmt: WireFormat, what: str) -> Mapping:
    tree = parse(raw, fmt)
    if not isinstance(tree, Mapping):
        raise MalformedInput(f"{what}: expected an object, got {type(tree).__name__}")
    return tree


def decode_form(raw: bytes, fmt: WireFormat) -> Form:
    tree = _document(raw, fmt, "form")
    fields = decode_fields(tree.get(wire_name(Form, "fields", fmt)), fmt)
    return load_model(Form, tree, fmt, fields=fields)


def decode_results(raw: bytes, fmt: WireFormat) -> Results:
    tree = _document(raw, fmt, "results")
    answers = decode_answers(tree.get(wire_name(Results, "answers", fmt)), fmt)
    return load_model(Results, tree, fmt, answers=answers)


__all__ = [
    "decode_field",
    "decode_answer",
    "decode_field_document",
    "decode_answer_document",
    "decode_fields",
    "decode_answers",
    "sort_answers",
    "decode_form",
    "decode_results",
]
