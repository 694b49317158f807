"""Wire format identifiers and per-attribute key tables.

Every serialisable model attribute carries a `WireKey` in its `Annotated`
metadata naming the attribute in both wire formats. The generic codec in
`formwire.logic.wire_codec` reads these entries; models never serialise
themselves.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Annotated, Optional

from pydantic import BeforeValidator

from formwire.logic.numeric import to_int64


class WireFormat(str, enum.Enum):
    JSON = "json"
    BINARY = "binary"


@dataclass(frozen=True)
class WireKey:
    """Attribute names for the text and binary formats.

    A name of None means the attribute is not carried in that format.
    `omitempty` drops zero values on encode; `binary_omitempty` overrides it
    for the binary format when the two formats disagree. `omit_when` names a
    sibling attribute whose truthiness suppresses this one. `omit_none` drops
    only None, keeping 0, false and empty containers.
    """

    json: Optional[str]
    binary: Optional[str]
    omitempty: bool = False
    binary_omitempty: Optional[bool] = None
    omit_when: Optional[str] = None
    omit_none: bool = False

    def name_for(self, fmt: WireFormat) -> Optional[str]:
        return self.json if fmt is WireFormat.JSON else self.binary

    def omits_empty(self, fmt: WireFormat) -> bool:
        if fmt is WireFormat.BINARY and self.binary_omitempty is not None:
            return self.binary_omitempty
        return self.omitempty


# Integer attribute tolerant of float and exponential literals.
Int64 = Annotated[int, BeforeValidator(to_int64)]


__all__ = ["WireFormat", "WireKey", "Int64"]
