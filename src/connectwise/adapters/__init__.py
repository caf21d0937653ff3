"""Adapters: httpx-backed I/O."""

from connectwise.adapters.http_client import build_async_client, build_headers
from connectwise.adapters.rest_executor import RestExecutor

__all__ = ["RestExecutor", "build_async_client", "build_headers"]
