"""formwire: tagged JSON/binary codec for forms and their results.

Decodes Form and Results documents, whose fields and answers are selected by
a `type` discriminator, into typed pydantic models and re-encodes them in the
same text (JSON) or binary (MessagePack) format. Business logic lives in
`formwire/logic/`; the webhook listener in `formwire/routes/`.
"""

from __future__ import annotations

from formwire.errors import CoercionFailure, FormValidationError, MalformedInput
from formwire.logic.decoder import decode_form, decode_results
from formwire.logic.encoder import encode_form, encode_results
from formwire.models.wire import WireFormat

__all__ = [
    "WireFormat",
    "decode_form",
    "decode_results",
    "encode_form",
    "encode_results",
    "MalformedInput",
    "CoercionFailure",
    "FormValidationError",
]
