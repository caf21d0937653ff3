"""Error hierarchy of the client.

Two families:
- `ConfigurationError`: local validation, raised before any I/O.
- `ApiError`: anything reported by (or while talking to) the remote service.
"""

from __future__ import annotations

from typing import Any

PARSE_ERROR_CODE = "EPARSE"
PARSE_ERROR_MESSAGE = "Error parsing response from server."


class ConnectWiseError(Exception):
    """Base exception for every error raised by this package."""


class ConfigurationError(ConnectWiseError, ValueError):
    """Raised when client options or call arguments are missing or invalid."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ApiError(ConnectWiseError):
    """A remote failure carrying `{code, message, errors}`."""

    def __init__(self, code: str | None, message: str | None, errors: list[Any] | None = None) -> None:
        super().__init__(message or code or self.__class__.__name__)
        self.code = code
        self.message = message
        self.errors = list(errors or [])

    def to_dict(self) -> dict[str, Any]:
        return {"code": self.code, "message": self.message, "errors": self.errors}


class TransportError(ApiError):
    """Network failure or timeout while sending the request."""


class ParseError(ApiError):
    """The response body was not valid JSON."""

    def __init__(self, cause: Exception) -> None:
        super().__init__(PARSE_ERROR_CODE, PARSE_ERROR_MESSAGE, [cause])


class ApplicationError(ApiError):
    """The service answered with a JSON body that reports a failure.

    `body` is the decoded payload, untouched.
    """

    def __init__(self, body: dict[str, Any]) -> None:
        errors = body.get("errors")
        super().__init__(
            str(body.get("code")),
            body.get("message"),
            errors if isinstance(errors, list) else None,
        )
        self.body = body

    def to_dict(self) -> dict[str, Any]:
        return self.body
