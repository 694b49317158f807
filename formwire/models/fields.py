"""Form and Field models.

Each concrete field extends `Field` with its own attributes. Forms hold an
ordered, mixed list of those variants; which variant a document decodes to is
decided by its `type` tag (see `formwire.logic.variant_registry`).
"""

from __future__ import annotations

from typing import Annotated, Any, List

import pydantic
from pydantic import BaseModel, StrictBool

from formwire.models.wire import Int64, WireKey


class FieldType:
    STATEMENT = "statement"
    OPINION_SCALE = "opinion_scale"
    MULTIPLE_CHOICE = "multiple_choice"
    # binary format only
    YES_NO = "yes_no"


class Field(BaseModel):
    """Attributes common to every field on a Form.

    Also the fallback shape for field types outside the known set, so the
    shared attributes of an unrecognised field still decode.
    """

    type: Annotated[str, WireKey("type", "t")] = ""
    question: Annotated[str, WireKey("question", "q")] = ""
    ref: Annotated[str, WireKey("ref", "r", omitempty=True)] = ""
    description: Annotated[str, WireKey("description", "d", omitempty=True, binary_omitempty=False)] = ""
    required: Annotated[StrictBool, WireKey("required", "req", omitempty=True)] = False
    tags: Annotated[List[str], WireKey("tags", "g", omitempty=True)] = []

    # Pairs a definition with a submitted answer; never persisted in binary.
    value: Annotated[Any, WireKey("value", None, omit_none=True)] = None


class Statement(Field):
    """Just text, no question to answer."""

    button_text: Annotated[str, WireKey("button_text", "bt", omitempty=True)] = ""
    hide_marks: Annotated[StrictBool, WireKey("hide_marks", "hm", omitempty=True)] = False


class OpinionLabels(BaseModel):
    left: Annotated[str, WireKey("left", "l", omitempty=True)] = ""
    center: Annotated[str, WireKey("center", "c", omitempty=True)] = ""
    right: Annotated[str, WireKey("right", "r", omitempty=True)] = ""


class OpinionScale(Field):
    """A scale from 0 (or 1 when `start_at_one`) across `steps` points."""

    steps: Annotated[Int64, WireKey("steps", "s")] = 0
    start_at_one: Annotated[StrictBool, WireKey("start_at_one", "sao", omitempty=True)] = False
    labels: Annotated[OpinionLabels, WireKey("labels", "l", omitempty=True)] = pydantic.Field(
        default_factory=OpinionLabels
    )


class MultipleChoiceChoice(BaseModel):
    label: Annotated[str, WireKey("label", "l")] = ""


class MultipleChoice(Field):
    choices: Annotated[List[MultipleChoiceChoice], WireKey("choices", "c")] = []


class YesNo(Field):
    pass


class FormMetadata(BaseModel):
    """Everything about a Form except its fields."""

    title: Annotated[str, WireKey("title", "t")] = ""
    tags: Annotated[List[str], WireKey("tags", "g", omitempty=True)] = []
    webhook_url: Annotated[str, WireKey("webhook_submit_url", "w", omitempty=True)] = ""


class Form(FormMetadata):
    fields: Annotated[List[Field], WireKey("fields", "f")] = []


__all__ = [
    "FieldType",
    "Field",
    "Statement",
    "OpinionLabels",
    "OpinionScale",
    "MultipleChoiceChoice",
    "MultipleChoice",
    "YesNo",
    "FormMetadata",
    "Form",
]
