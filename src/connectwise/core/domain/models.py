"""Domain models (Pydantic v2).

Notes:
- These models describe *what* a request/response is, not *how* it travels.
- `ClientConfig` is frozen: it is shared by every concurrent call of a client.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

_ABSOLUTE_URL = re.compile(r"^https?://", re.IGNORECASE)


class HttpMethod(str, Enum):
    """HTTP verbs accepted by the REST API."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"

    @property
    def has_body(self) -> bool:
        return self in (HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH)


class ClientConfig(BaseModel):
    """Resolved connection settings of a client.

    Built once by `core.config.build_client_config`; every field is non-empty
    and `auth` is derived from company id + public key + private key.
    """

    model_config = ConfigDict(frozen=True)

    company_id: str = Field(..., min_length=1, description="Company (tenant) identifier.")
    company_url: str = Field(..., min_length=1, description="Host serving the API, without scheme.")
    api_url: str = Field(..., min_length=1, description="Base URL prefixed to relative paths.")
    api_version: str = Field(..., min_length=1, description="Version sent in the Accept header.")
    public_key: str = Field(..., min_length=1, repr=False)
    private_key: str = Field(..., min_length=1, repr=False)
    auth: str = Field(..., min_length=1, repr=False, description="Authorization header value.")
    timeout: float = Field(..., gt=0, description="Per-request timeout (milliseconds).")

    @property
    def auth_raw(self) -> str:
        return f"{self.company_id}+{self.public_key}:{self.private_key}"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000


class RequestSpec(BaseModel):
    """One call to the API: path (relative or absolute), method and params."""

    path: str = Field(..., min_length=1)
    method: HttpMethod
    params: Any = None

    @property
    def is_absolute(self) -> bool:
        return bool(_ABSOLUTE_URL.match(self.path))

    def url_for(self, api_url: str) -> str:
        return self.path if self.is_absolute else api_url + self.path


class DecodedResponse(BaseModel):
    """Successful outcome: the decoded JSON body (or `{}` for empty successes)."""

    kind: Literal["ok"] = "ok"
    body: Any = None


class ApplicationFailure(BaseModel):
    """The service reported a domain-level failure inside a JSON body."""

    kind: Literal["error"] = "error"
    body: dict[str, Any]


ResponseOutcome = Annotated[Union[DecodedResponse, ApplicationFailure], Field(discriminator="kind")]


class PaginationOptions(BaseModel):
    """Page size, first page and optional safety guards of a pagination run.

    Without `max_pages`/`max_results` the loop only stops on a short page.
    """

    model_config = ConfigDict(frozen=True)

    page_size: int = Field(default=100, ge=1)
    start_page: int = Field(default=0, ge=0)
    max_pages: int | None = Field(
        default=None,
        ge=1,
        description="Stop after this many calls even if pages are still full.",
    )
    max_results: int | None = Field(
        default=None,
        ge=1,
        description="Stop once this many items are collected (result is truncated).",
    )
