"""Contract of the functions the paginator drives."""

from __future__ import annotations

from typing import Any, Awaitable, Protocol, Sequence, runtime_checkable


@runtime_checkable
class PageFetcher(Protocol):
    """Async callable returning one page of items.

    Typically an endpoint wrapper around `ConnectWise.execute`. The paginator
    passes the page parameters either as the last positional argument
    (explicit mode) or by updating an options mapping already present in the
    arguments (legacy mode).
    """

    def __call__(self, *args: Any) -> Awaitable[Sequence[Any]]:
        ...
