"""Re-encode decoded values back to either wire format.

Encoding needs no registry: every instance dumps through its own class's key
table, so a Form's mixed field list serialises variant by variant.
"""

from __future__ import annotations

from formwire.logic.value_codec import encode_value
from formwire.logic.wire_codec import dump_model, serialize
from formwire.models.fields import Field, Form
from formwire.models.results import Results, ResultsAnswer
from formwire.models.wire import WireFormat


def answer_tree(answer: ResultsAnswer, fmt: WireFormat) -> dict:
    return dump_model(answer, fmt, value=encode_value(answer.value, fmt))


def encode_field(field: Field, fmt: WireFormat) -> bytes:
    return serialize(dump_model(field, fmt), fmt)


def encode_answer(answer: ResultsAnswer, fmt: WireFormat) -> bytes:
    return serialize(answer_tree(answer, fmt), fmt)


def encode_form(form: Form, fmt: WireFormat) -> bytes:
    return serialize(dump_model(form, fmt), fmt)


def encode_results(results: Results, fmt: WireFormat) -> bytes:
    answers = [answer_tree(answer, fmt) for answer in results.answers]
    return serialize(dump_model(results, fmt, answers=answers), fmt)


__all__ = [
    "answer_tree",
    "encode_field",
    "encode_answer",
    "encode_form",
    "encode_results",
]
