"""Domain models and entities.

The domain knows nothing about httpx or environment variables: only requests,
responses and pagination settings.
"""

from connectwise.core.domain.models import (
    ApplicationFailure,
    ClientConfig,
    DecodedResponse,
    HttpMethod,
    PaginationOptions,
    RequestSpec,
    ResponseOutcome,
)

__all__ = [
    "ApplicationFailure",
    "ClientConfig",
    "DecodedResponse",
    "HttpMethod",
    "PaginationOptions",
    "RequestSpec",
    "ResponseOutcome",
]
