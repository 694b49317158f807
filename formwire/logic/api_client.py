"""Outbound client for creating forms on the forms API.

The token, endpoint and HTTP client are supplied explicitly through
`ApiConfig` and an optional `httpx.Client`, so several clients with
different credentials can coexist. The client never retries; a caller that
wants retries resubmits.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from formwire.config import ApiConfig
from formwire.errors import ApiError, EmptyTokenError, UnexpectedResponseError
from formwire.logic.encoder import encode_form
from formwire.models.api import ApiErrorBody, CreateResult
from formwire.models.fields import Form
from formwire.models.wire import WireFormat

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-API-TOKEN"


class FormsClient:
    def __init__(self, config: ApiConfig, http_client: Optional[httpx.Client] = None) -> None:
        self.config = config
        self._http = http_client or httpx.Client(timeout=config.timeout_seconds)
        self._owns_http = http_client is None

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "FormsClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def create(self, form: Form) -> CreateResult:
        """POST `form` to the forms endpoint and return the created form's URLs.

        Raises EmptyTokenError before any I/O when no token is configured,
        ApiError when the API reports a per-field error, and
        UnexpectedResponseError for any other non-201 reply.
        """
        if not self.config.token:
            raise EmptyTokenError()

        body = encode_form(form, WireFormat.JSON)
        url = self.config.forms_url
        logger.info("api_client.create:start", extra={"url": url, "fields": len(form.fields)})
        resp = self._http.post(
            url,
            content=body,
            headers={TOKEN_HEADER: self.config.token, "Content-Type": "application/json"},
        )
        if resp.status_code != httpx.codes.CREATED:
            raise self._error_from(resp)
        try:
            return CreateResult.model_validate_json(resp.content)
        except ValidationError as exc:
            raise UnexpectedResponseError(f"undecodable response from /forms: {exc}") from exc

    def _error_from(self, resp: httpx.Response) -> Exception:
        status = f"{resp.status_code} {resp.reason_phrase}".strip()
        try:
            err = ApiErrorBody.model_validate_json(resp.content)
        except ValidationError:
            err = None
        if err is None or not err.error_type:
            logger.warning("api_client.create:unexpected_response", extra={"status": resp.status_code})
            return UnexpectedResponseError(f"unexpected response from /forms: {status}")
        logger.warning(
            "api_client.create:api_error",
            extra={"status": resp.status_code, "error_type": err.error_type, "field": err.field},
        )
        return ApiError(err.error_type, err.field, err.description)


__all__ = ["FormsClient", "TOKEN_HEADER"]
