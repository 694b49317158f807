"""Discriminator tables for the Field and Answer variants.

A registry maps a type tag to the class a document carrying that tag decodes
into. Tags outside the closed set resolve to the registry's fallback (the
base `Field` for fields, None for answer values) rather than raising.
"""

from __future__ import annotations

from typing import Mapping, Optional

from formwire.models.fields import (
    Field,
    FieldType,
    MultipleChoice,
    OpinionScale,
    Statement,
    YesNo,
)
from formwire.models.results import AnswerType, ChoicesValue, ChoiceValue, NumberValue
from formwire.models.wire import WireFormat


class VariantRegistry:
    def __init__(self, table: Mapping[str, type], fallback: Optional[type] = None) -> None:
        self._table = dict(table)
        self.fallback = fallback

    def resolve(self, tag: object) -> Optional[type]:
        if not isinstance(tag, str):
            return self.fallback
        return self._table.get(tag, self.fallback)

    def extend(self, extra: Mapping[str, type]) -> "VariantRegistry":
        return VariantRegistry({**self._table, **extra}, fallback=self.fallback)

    def tags(self) -> list[str]:
        return list(self._table)

    def __contains__(self, tag: object) -> bool:
        return tag in self._table


FIELD_VARIANTS = VariantRegistry(
    {
        FieldType.STATEMENT: Statement,
        FieldType.OPINION_SCALE: OpinionScale,
        FieldType.MULTIPLE_CHOICE: MultipleChoice,
    },
    fallback=Field,
)

BINARY_FIELD_VARIANTS = FIELD_VARIANTS.extend({FieldType.YES_NO: YesNo})

ANSWER_VARIANTS = VariantRegistry(
    {
        AnswerType.NUMBER: NumberValue,
        AnswerType.CHOICE: ChoiceValue,
        AnswerType.CHOICES: ChoicesValue,
        AnswerType.TEXT: str,
        AnswerType.BOOLEAN: bool,
    },
)


def field_variants(fmt: WireFormat) -> VariantRegistry:
    return BINARY_FIELD_VARIANTS if fmt is WireFormat.BINARY else FIELD_VARIANTS


__all__ = [
    "VariantRegistry",
    "FIELD_VARIANTS",
    "BINARY_FIELD_VARIANTS",
    "ANSWER_VARIANTS",
    "field_variants",
]
