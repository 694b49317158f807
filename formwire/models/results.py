"""Results submitted through the webhook after someone takes a form.

The shape of `ResultsAnswer.value` depends on the answer's `type`:

- number  -> NumberValue
- boolean -> bool
- text    -> str
- choice  -> ChoiceValue
- choices -> ChoicesValue

An unrecognised type leaves `value` as None.
"""

from __future__ import annotations

from typing import Annotated, Any, List

from pydantic import BaseModel, StrictBool

from formwire.models.wire import Int64, WireKey


class AnswerType:
    NUMBER = "number"
    BOOLEAN = "boolean"
    TEXT = "text"
    CHOICE = "choice"
    CHOICES = "choices"


class NumberValue(BaseModel):
    amount: Annotated[Int64, WireKey("amount", "a")] = 0


class ChoiceValue(BaseModel):
    """A single picked label, or a free-form `other` answer.

    `empty_other` records that no other value was sent at all, which differs
    from an other value of "".
    """

    label: Annotated[str, WireKey("label", "l", binary_omitempty=True)] = ""
    other: Annotated[str, WireKey("other", "o", omit_when="empty_other")] = ""
    empty_other: Annotated[StrictBool, WireKey(None, "eo", omitempty=True)] = False


class ChoicesValue(BaseModel):
    labels: Annotated[List[str], WireKey("labels", "l", binary_omitempty=True)] = []
    other: Annotated[str, WireKey("other", "o", omit_when="empty_other")] = ""
    empty_other: Annotated[StrictBool, WireKey(None, "eo", omitempty=True)] = False


class ResultsAnswer(BaseModel):
    field_id: Annotated[Int64, WireKey("field_id", "i")] = 0
    type: Annotated[str, WireKey("type", "t")] = ""
    tags: Annotated[List[str], WireKey("tags", "g", omitempty=True)] = []
    value: Annotated[Any, WireKey("value", "v")] = None

    def __str__(self) -> str:
        from formwire.logic.answer_canonical import canonicalize_answer_value

        return canonicalize_answer_value(self.value)


class Results(BaseModel):
    uid: Annotated[str, WireKey("uid", "i")] = ""
    token: Annotated[str, WireKey("token", "t")] = ""
    answers: Annotated[List[ResultsAnswer], WireKey("answers", "a")] = []


__all__ = [
    "AnswerType",
    "NumberValue",
    "ChoiceValue",
    "ChoicesValue",
    "ResultsAnswer",
    "Results",
]
