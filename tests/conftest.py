"""Shared fixtures: a resolved config and httpx clients backed by MockTransport."""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from connectwise.core.config import build_client_config
from connectwise.core.domain.models import ClientConfig

Handler = Callable[[httpx.Request], httpx.Response]


@pytest.fixture
def config() -> ClientConfig:
    return build_client_config("acme", "pub", "priv", "cw.example.com")


@pytest.fixture
def sent() -> list[httpx.Request]:
    """Requests seen by the mock transport, in order."""
    return []


@pytest.fixture
def mock_client(sent: list[httpx.Request]) -> Callable[[Handler], httpx.AsyncClient]:
    def factory(handler: Handler) -> httpx.AsyncClient:
        def recording(request: httpx.Request) -> httpx.Response:
            sent.append(request)
            return handler(request)

        return httpx.AsyncClient(transport=httpx.MockTransport(recording))

    return factory
