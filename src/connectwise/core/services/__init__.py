"""Core services: response classification and pagination."""

from connectwise.core.services.pagination import DEFAULT_PAGE_SIZE, paginate
from connectwise.core.services.responses import decode_response

__all__ = ["DEFAULT_PAGE_SIZE", "decode_response", "paginate"]
