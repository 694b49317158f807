"""Form and Field encode/decode in the text and binary formats."""

from __future__ import annotations

import msgspec
import pytest

from formwire.errors import MalformedInput
from formwire.logic.decoder import decode_field_document, decode_form
from formwire.logic.encoder import encode_field, encode_form
from formwire.models.fields import (
    Field,
    FieldType,
    Form,
    MultipleChoice,
    MultipleChoiceChoice,
    OpinionLabels,
    OpinionScale,
    Statement,
    YesNo,
)
from formwire.models.wire import WireFormat

JSON = WireFormat.JSON
BINARY = WireFormat.BINARY


def _opinion_scale() -> OpinionScale:
    return OpinionScale(
        type=FieldType.OPINION_SCALE,
        steps=5,
        start_at_one=True,
        labels=OpinionLabels(left="l", center="c", right="r"),
    )


def _multiple_choice() -> MultipleChoice:
    return MultipleChoice(
        type=FieldType.MULTIPLE_CHOICE,
        choices=[MultipleChoiceChoice(label="Label")],
    )


def test_json_statement() -> None:
    form = Form(fields=[Statement(type=FieldType.STATEMENT)])
    raw = encode_form(form, JSON)
    assert raw == b'{"title":"","fields":[{"type":"statement","question":""}]}'
    assert decode_form(raw, JSON) == form


def test_json_multiple_choice() -> None:
    form = Form(fields=[_multiple_choice()])
    raw = encode_form(form, JSON)
    assert raw == (
        b'{"title":"","fields":[{"type":"multiple_choice","question":"",'
        b'"choices":[{"label":"Label"}]}]}'
    )
    assert decode_form(raw, JSON) == form


def test_json_opinion_labels() -> None:
    form = Form(fields=[_opinion_scale()])
    raw = encode_form(form, JSON)
    assert raw == (
        b'{"title":"","fields":[{"type":"opinion_scale","question":"","steps":5,'
        b'"start_at_one":true,"labels":{"left":"l","center":"c","right":"r"}}]}'
    )
    assert decode_form(raw, JSON) == form


def test_binary_statement_uses_short_keys() -> None:
    statement = Statement(type=FieldType.STATEMENT, question="Hey?")
    form = Form(fields=[statement])
    raw = encode_form(form, BINARY)
    assert msgspec.msgpack.decode(raw) == {"t": "", "f": [{"t": "statement", "q": "Hey?", "d": ""}]}
    assert decode_form(raw, BINARY) == form


def test_binary_multiple_choice_and_opinion_scale() -> None:
    form = Form(title="Survey", tags=["a"], fields=[_multiple_choice(), _opinion_scale()])
    raw = encode_form(form, BINARY)
    assert msgspec.msgpack.decode(raw) == {
        "t": "Survey",
        "g": ["a"],
        "f": [
            {"t": "multiple_choice", "q": "", "d": "", "c": [{"l": "Label"}]},
            {"t": "opinion_scale", "q": "", "d": "", "s": 5, "sao": True, "l": {"l": "l", "c": "c", "r": "r"}},
        ],
    }
    assert decode_form(raw, BINARY) == form


@pytest.mark.parametrize("fmt", [JSON, BINARY])
def test_mixed_fields_keep_order_and_concrete_types(fmt) -> None:
    form = Form(
        title="Mixed",
        webhook_url="https://example.com/hook",
        fields=[
            Statement(type=FieldType.STATEMENT, question="Intro", button_text="Go", hide_marks=True),
            _opinion_scale(),
            MultipleChoice(
                type=FieldType.MULTIPLE_CHOICE,
                question="Pick",
                ref="pick",
                description="one of them",
                required=True,
                tags=["t1", "t2"],
                choices=[MultipleChoiceChoice(label="a"), MultipleChoiceChoice(label="b")],
            ),
            Statement(type=FieldType.STATEMENT, question="Bye"),
        ],
    )
    decoded = decode_form(encode_form(form, fmt), fmt)
    assert decoded == form
    assert [type(f) for f in decoded.fields] == [Statement, OpinionScale, MultipleChoice, Statement]


def test_decode_form_from_text_document() -> None:
    raw = b"""{
        "title": "Form",
        "fields": [
            {"type": "statement", "question": "Hey"}
        ]
    }"""
    form = decode_form(raw, JSON)
    assert form.title == "Form"
    assert form.fields == [Statement(type="statement", question="Hey")]


def test_unknown_field_type_decodes_as_base_field() -> None:
    raw = b'{"type":"essay","question":"Why?","ref":"why","steps":7}'
    field = decode_field_document(raw, JSON)
    assert type(field) is Field
    assert field.type == "essay"
    assert field.question == "Why?"
    assert field.ref == "why"


def test_yes_no_decodes_only_in_binary() -> None:
    tree = {"t": "yes_no", "q": "Ok?", "d": ""}
    assert type(decode_field_document(msgspec.msgpack.encode(tree), BINARY)) is YesNo
    text = decode_field_document(b'{"type":"yes_no","question":"Ok?"}', JSON)
    assert type(text) is Field


def test_field_value_is_carried_in_text_only() -> None:
    field = Statement(type=FieldType.STATEMENT, question="Q", value="answer")
    assert encode_field(field, JSON) == b'{"type":"statement","question":"Q","value":"answer"}'
    assert decode_field_document(encode_field(field, JSON), JSON) == field

    binary = decode_field_document(encode_field(field, BINARY), BINARY)
    assert binary.value is None
    assert binary.question == "Q"


@pytest.mark.parametrize("value", [0, False, "", [], {}])
def test_zero_field_values_survive_a_text_round_trip(value) -> None:
    form = Form(title="t", fields=[Statement(type=FieldType.STATEMENT, question="q", value=value)])
    raw = encode_form(form, JSON)
    assert b'"value":' in raw
    decoded = decode_form(raw, JSON)
    assert decoded == form
    assert type(decoded.fields[0].value) is type(value)


def test_unset_field_value_is_omitted() -> None:
    field = Statement(type=FieldType.STATEMENT, question="q")
    assert encode_field(field, JSON) == b'{"type":"statement","question":"q"}'


@pytest.mark.parametrize("value", [0.1, {"a": 0.1}, [1.5, 2, "x"], 2.0])
def test_float_field_values_decode_as_floats(value) -> None:
    form = Form(title="t", fields=[Statement(type=FieldType.STATEMENT, question="q", value=value)])
    decoded = decode_form(encode_form(form, JSON), JSON)
    assert decoded == form
    assert repr(decoded.fields[0].value) == repr(value)


def test_exponential_steps_decode_exactly() -> None:
    field = decode_field_document(b'{"type":"opinion_scale","question":"","steps":1.1e+01}', JSON)
    assert isinstance(field, OpinionScale)
    assert field.steps == 11


def test_null_attributes_keep_zero_values() -> None:
    field = decode_field_document(b'{"type":"multiple_choice","question":null,"choices":null}', JSON)
    assert field == MultipleChoice(type="multiple_choice")


@pytest.mark.parametrize(
    "raw",
    [
        b'{"title":"x","fields":[{"type":"statement","question":5}]}',
        b'{"title":"x","fields":[{"type":"opinion_scale","question":"","steps":"many"}]}',
        b'{"title":"x","fields":[{"type":"multiple_choice","question":"","choices":{"label":"a"}}]}',
        b'{"title":"x","fields":{"type":"statement"}}',
        b'{"title":"x","fields":["statement"]}',
        b'{"title":["x"],"fields":[]}',
        b'["not","a","form"]',
        b'{"title":"x",',
        b"",
    ],
)
def test_malformed_forms_raise(raw) -> None:
    with pytest.raises(MalformedInput):
        decode_form(raw, JSON)


def test_bad_field_names_its_index() -> None:
    raw = b'{"fields":[{"type":"statement","question":"ok"},{"type":"statement","required":"yes"}]}'
    with pytest.raises(MalformedInput, match=r"fields\[1\]"):
        decode_form(raw, JSON)


def test_truncated_binary_form_raises() -> None:
    raw = encode_form(Form(title="t", fields=[_opinion_scale()]), BINARY)
    with pytest.raises(MalformedInput):
        decode_form(raw[:-4], BINARY)
