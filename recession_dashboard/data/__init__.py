"""Data fetching and caching."""

from .fred_fetcher import FredFetcher
from .cache import DataCache

__all__ = ["FredFetcher", "DataCache"]
