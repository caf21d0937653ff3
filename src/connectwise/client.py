"""`ConnectWise` client: configuration + request executor + paginator."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx

from connectwise.adapters.rest_executor import RestExecutor
from connectwise.core.config import ClientSettings, build_client_config
from connectwise.core.domain.models import ClientConfig, HttpMethod
from connectwise.core.interfaces.fetcher import PageFetcher
from connectwise.core.services.pagination import DEFAULT_PAGE_SIZE
from connectwise.core.services.pagination import paginate as _paginate


class ConnectWise:
    """Async client for the ConnectWise Manage REST API.

    Example:
        cw = ConnectWise("acme", "pub", "priv", "api-na.myconnectwise.net")
        tickets = await cw.paginate(
            cw.execute, ("/service/tickets", "GET"), {"conditions": "closedFlag=false"}
        )
    """

    def __init__(
        self,
        company_id: str | None = None,
        public_key: str | None = None,
        private_key: str | None = None,
        company_url: str | None = None,
        *,
        api_version: str | None = None,
        entry_point: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
        config: ClientConfig | None = None,
    ) -> None:
        if config is None:
            config = build_client_config(
                company_id,
                public_key,
                private_key,
                company_url,
                api_version=api_version,
                entry_point=entry_point,
                timeout=timeout,
            )
        self._config = config
        self._executor = RestExecutor(config, http_client=http_client)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> "ConnectWise":
        """Build a client from `CONNECTWISE_*` env vars / `.env` files."""

        settings = settings or ClientSettings()
        return cls(config=settings.to_config(), http_client=http_client)

    @property
    def config(self) -> ClientConfig:
        return self._config

    async def execute(self, path: str, method: str | HttpMethod, params: Any = None) -> Any:
        """See `RestExecutor.execute`."""

        return await self._executor.execute(path, method, params)

    api = execute

    async def paginate(
        self,
        fn: PageFetcher,
        args: Sequence[Any] = (),
        params: Mapping[str, Any] | None = None,
        *,
        bound_to: object | None = None,
        page_size: int = DEFAULT_PAGE_SIZE,
        start_page: int = 0,
        max_pages: int | None = None,
        max_results: int | None = None,
    ) -> list[Any]:
        """Collect every page of `fn`. See `core.services.pagination.paginate`."""

        return await _paginate(
            fn,
            args,
            params,
            bound_to=bound_to,
            page_size=page_size,
            start_page=start_page,
            max_pages=max_pages,
            max_results=max_results,
        )
