"""Catalog stores."""

from .base import CatalogStore, InMemoryCatalogStore
from .json_store import JsonCatalogStore, parse_catalog

__all__ = ["CatalogStore", "InMemoryCatalogStore", "JsonCatalogStore", "parse_catalog"]
