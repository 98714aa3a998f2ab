"""JSON catalog store.

Loads ``{"categories": [...], "products": [...]}`` from a remote URL when one
is configured, falling back to the local file, then to the configured
categories with no products. Whatever loads is cached for `cache_ttl_sec`.
"""

from __future__ import annotations

import json
import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from orderrouter.core.config import CatalogConfig, StoreConfig
from orderrouter.core.types import Category, Product

from .base import CatalogStore

logger = logging.getLogger(__name__)


@dataclass
class CatalogSnapshot:
    categories: list[Category] = field(default_factory=list)
    products: list[Product] = field(default_factory=list)
    source: str = "empty"


def parse_catalog(data: Any, *, source: str) -> CatalogSnapshot:
    """Validate raw catalog JSON. Invalid entries are skipped with a warning."""
    if not isinstance(data, dict):
        raise ValueError(f"catalog from {source} must be a JSON object")

    snapshot = CatalogSnapshot(source=source)
    for raw in data.get("categories") or []:
        try:
            snapshot.categories.append(Category.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping invalid category in %s: %s", source, e)
    for raw in data.get("products") or []:
        try:
            snapshot.products.append(Product.model_validate(raw))
        except ValidationError as e:
            logger.warning("Skipping invalid product in %s: %s", source, e)
    return snapshot


class JsonCatalogStore(CatalogStore):
    """Catalog backed by a JSON document.

    Categories come from store configuration when it defines any; the JSON's
    own category list is only used when configuration has none.
    """

    def __init__(
        self,
        config: CatalogConfig,
        store: StoreConfig,
        *,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._config = config
        self._store = store
        self._client = client
        self._snapshot: CatalogSnapshot | None = None
        self._loaded_at = 0.0

    def invalidate(self) -> None:
        self._snapshot = None
        self._loaded_at = 0.0

    def _fresh(self) -> bool:
        if self._snapshot is None:
            return False
        return time.monotonic() - self._loaded_at < self._config.cache_ttl_sec

    async def _fetch_remote(self) -> CatalogSnapshot:
        # cache-buster keeps CDN copies from serving a stale document
        params = {"t": str(int(time.time() * 1000))}
        if self._client is not None:
            response = await self._client.get(
                self._config.url, params=params, timeout=self._config.timeout_sec
            )
            response.raise_for_status()
            data = response.json()
        else:
            async with httpx.AsyncClient(timeout=self._config.timeout_sec) as client:
                response = await client.get(self._config.url, params=params)
                response.raise_for_status()
                data = response.json()
        return parse_catalog(data, source=self._config.url)

    def _read_local(self) -> CatalogSnapshot:
        path = Path(self._config.path)
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        return parse_catalog(data, source=str(path))

    async def load(self) -> CatalogSnapshot:
        if self._fresh():
            return self._snapshot

        snapshot: CatalogSnapshot | None = None
        if self._config.url:
            try:
                snapshot = await self._fetch_remote()
            except (httpx.HTTPError, ValueError) as e:
                logger.warning("Remote catalog unavailable, using local file: %s", e)

        if snapshot is None:
            try:
                snapshot = self._read_local()
            except (OSError, ValueError) as e:
                logger.warning("Local catalog %s unavailable: %s", self._config.path, e)
                snapshot = CatalogSnapshot(source="config")

        if self._store.categories:
            snapshot.categories = list(self._store.categories)

        self._snapshot = snapshot
        self._loaded_at = time.monotonic()
        logger.info(
            "Catalog loaded from %s: %d categories, %d products",
            snapshot.source,
            len(snapshot.categories),
            len(snapshot.products),
        )
        return snapshot

    async def get_categories(self) -> list[Category]:
        return list((await self.load()).categories)

    async def get_all_products(self) -> list[Product]:
        return list((await self.load()).products)


__all__ = ["CatalogSnapshot", "JsonCatalogStore", "parse_catalog"]
