"""Query-string serialization for GET requests.

Each key and value is percent-encoded on its own, so `&`, `=` and `+` inside a
value survive the round trip. Other characters that `encodeURI` leaves alone
are kept literal:

    >>> parameterize({"id": 1234, "conditions": 'board/name="Help desk"'})
    '?id=1234&conditions=board/name%3D%22Help%20desk%22'
"""

from __future__ import annotations

from typing import Any, Mapping
from urllib.parse import quote

# encodeURI's reserved/unreserved extras minus the query delimiters (& = + # ?).
_SAFE = "-_.!~*'();,/:@$"


def _encode(value: Any) -> str:
    if isinstance(value, bool):
        value = "true" if value else "false"
    return quote(str(value), safe=_SAFE)


def parameterize(params: Mapping[str, Any] | str) -> str:
    """Build `?k1=v1&k2=v2` from a mapping; strings are returned unchanged.

    Pairs whose value is None are skipped. An empty mapping gives "".
    """

    if isinstance(params, str):
        return params
    if not isinstance(params, Mapping):
        raise TypeError(f"query params must be a mapping or a string, got {type(params).__name__}")

    pairs = [f"{_encode(key)}={_encode(value)}" for key, value in params.items() if value is not None]
    if not pairs:
        return ""
    return "?" + "&".join(pairs)
