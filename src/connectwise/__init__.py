"""Async client for the ConnectWise Manage REST API."""

from connectwise.client import ConnectWise
from connectwise.core.config import ClientSettings, build_client_config
from connectwise.core.domain.models import ClientConfig, HttpMethod, PaginationOptions
from connectwise.core.errors import (
    ApiError,
    ApplicationError,
    ConfigurationError,
    ConnectWiseError,
    ParseError,
    TransportError,
)
from connectwise.core.params import parameterize
from connectwise.core.services.pagination import paginate

__all__ = [
    "ApiError",
    "ApplicationError",
    "ClientConfig",
    "ClientSettings",
    "ConfigurationError",
    "ConnectWise",
    "ConnectWiseError",
    "HttpMethod",
    "PaginationOptions",
    "ParseError",
    "TransportError",
    "build_client_config",
    "paginate",
    "parameterize",
]

__version__ = "0.1.0"
