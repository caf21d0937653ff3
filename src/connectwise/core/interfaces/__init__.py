"""Interfaces/abstractions of the core (Protocol contracts)."""

from connectwise.core.interfaces.fetcher import PageFetcher

__all__ = ["PageFetcher"]
