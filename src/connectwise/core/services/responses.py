"""Classification of raw responses into a `ResponseOutcome`.

This is the one place where "success" and "application error" are told apart;
callers downstream only look at the tag.
"""

from __future__ import annotations

import json
from typing import Any

from connectwise.core.domain.models import (
    ApplicationFailure,
    DecodedResponse,
    HttpMethod,
    ResponseOutcome,
)
from connectwise.core.errors import ParseError


def is_empty_success(method: HttpMethod, status_code: int, text: str) -> bool:
    """DELETE with an empty body, or POST answered with 204."""

    if method is HttpMethod.DELETE and text == "":
        return True
    return method is HttpMethod.POST and status_code == 204


def _is_application_error(body: Any) -> bool:
    return isinstance(body, dict) and bool(body.get("code"))


def decode_response(method: HttpMethod, status_code: int, text: str) -> ResponseOutcome:
    """Decode a response body.

    Raises:
        ParseError: the body is not valid JSON.
    """

    if is_empty_success(method, status_code, text):
        return DecodedResponse(body={})

    try:
        body = json.loads(text)
    except ValueError as exc:
        raise ParseError(exc) from exc

    if _is_application_error(body):
        return ApplicationFailure(body=body)
    return DecodedResponse(body=body)
