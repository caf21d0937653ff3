"""Generic "fetch every page" helper.

The paginator never talks HTTP: it calls an async function with page
parameters, concatenates the returned lists and stops on the first short page.
Pages are requested one after another; the accumulated order is the page order.

Two ways of handing the page parameters to the wrapped function:
- explicit: pass `params`; each call receives `{**params, "page", "pageSize"}`
  as its last positional argument.
- legacy: leave `params` unset; mappings in `args` that already look like
  list options (`page`, `pageSize`, `conditions` or `orderBy`) are updated in
  place before every call.

Termination depends on the remote service eventually returning a short page.
`max_pages` / `max_results` bound endpoints that never do.
"""

from __future__ import annotations

import inspect
import logging
import types
from collections.abc import MutableMapping
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from connectwise.core.domain.models import PaginationOptions
from connectwise.core.interfaces.fetcher import PageFetcher

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100
OPTION_KEYS = frozenset({"page", "pageSize", "conditions", "orderBy"})


@dataclass
class PaginationState:
    """Mutable state of a single `paginate` run."""

    page: int
    page_size: int
    results: list[Any] = field(default_factory=list)
    calls: int = 0


def inject_page_params(args: Sequence[Any], page: int, page_size: int) -> None:
    """Set `page`/`pageSize` on every options-like mapping found in `args`."""

    for arg in args:
        if isinstance(arg, MutableMapping) and OPTION_KEYS.intersection(arg.keys()):
            arg["page"] = page
            arg["pageSize"] = page_size


def _call_args(
    args: Sequence[Any],
    params: Mapping[str, Any] | None,
    state: PaginationState,
) -> tuple[Any, ...]:
    if params is None:
        inject_page_params(args, state.page, state.page_size)
        return tuple(args)
    page_params = {**params, "page": state.page, "pageSize": state.page_size}
    return (*args, page_params)


def _guard_reached(options: PaginationOptions, state: PaginationState) -> bool:
    if options.max_results is not None and len(state.results) >= options.max_results:
        logger.warning(
            "Pagination stopped at max_results=%s after %s page(s)",
            options.max_results,
            state.calls,
        )
        return True
    if options.max_pages is not None and state.calls >= options.max_pages:
        logger.warning("Pagination stopped at max_pages=%s", options.max_pages)
        return True
    return False


def _bind(fn: Any, bound_to: object) -> Any:
    """Bind `fn` to `bound_to`; an already bound method is rebound, not wrapped."""

    if inspect.ismethod(fn):
        return types.MethodType(fn.__func__, bound_to)
    return types.MethodType(fn, bound_to)


def _truncate(options: PaginationOptions, results: list[Any]) -> list[Any]:
    if options.max_results is not None:
        return results[: options.max_results]
    return results


async def paginate(
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
    """Call `fn` page after page and return every item, in order.

    Args:
        fn: async callable returning a list (one page).
        args: positional arguments passed to every call.
        params: explicit list options; enables explicit mode (see module doc).
        bound_to: if set, `fn` (plain function or bound method) is bound to it
            before calling.
        page_size: requested size; a page shorter than this ends the loop.
        start_page: index of the first page.
        max_pages: optional cap on the number of calls.
        max_results: optional cap on the number of collected items.

    Raises:
        TypeError: `fn` resolved to something that is not a list/tuple.
        Exception: whatever `fn` raises, unchanged; collected items are dropped.
    """

    options = PaginationOptions(
        page_size=page_size,
        start_page=start_page,
        max_pages=max_pages,
        max_results=max_results,
    )
    if bound_to is not None:
        fn = _bind(fn, bound_to)

    state = PaginationState(page=options.start_page, page_size=options.page_size)
    while True:
        page = await fn(*_call_args(args, params, state))
        state.calls += 1
        if not isinstance(page, (list, tuple)):
            raise TypeError(f"page fetcher must return a list, got {type(page).__name__}")

        state.results.extend(page)
        logger.debug("Fetched page %s (%s item(s))", state.page, len(page))

        if len(page) != options.page_size or _guard_reached(options, state):
            return _truncate(options, state.results)
        state.page += 1
