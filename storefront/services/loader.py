import asyncio
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Dict, List, Mapping, Optional

from storefront.models.schemas import Collection, Product
from storefront.services.queries import (
    FEATURED_COLLECTION_QUERY, COLLECTIONS_QUERY, RECOMMENDED_PRODUCTS_QUERY
)

logger = logging.getLogger(__name__)

COLLECTIONS = "collections"
RECOMMENDED_PRODUCTS = "recommended_products"


@dataclass(frozen=True)
class CriticalPayload:
    featured_collection: Optional[Collection] = None


@dataclass(frozen=True)
class PageLoadResult:
    """
    Everything the home page needs for one request.

    critical_data is fully resolved. Each deferred_data entry is a future that
    resolves to its parsed result or to None; it never raises.
    """
    critical_data: CriticalPayload
    deferred_data: Mapping[str, "asyncio.Future[Any]"]


def _nodes(data: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    connection = data.get(key) or {}
    return connection.get("nodes") or []


def parse_collections(data: Dict[str, Any]) -> List[Collection]:
    return [Collection.model_validate(node) for node in _nodes(data, "collections")]


def parse_products(data: Dict[str, Any]) -> List[Product]:
    return [Product.model_validate(node) for node in _nodes(data, "products")]


class HomePageLoader:
    """Loads home page data from a storefront context (anything with an async query())"""

    def __init__(self, storefront):
        self.storefront = storefront

    async def load(self) -> PageLoadResult:
        # Deferred queries start first so all three run concurrently
        deferred = self.load_deferred_data()
        try:
            critical = await self.load_critical_data()
        except Exception:
            for future in deferred.values():
                future.cancel()
            raise

        return PageLoadResult(critical_data=critical, deferred_data=MappingProxyType(deferred))

    async def load_critical_data(self) -> CriticalPayload:
        """Featured collection; failures propagate to the caller"""
        data = await self.storefront.query(FEATURED_COLLECTION_QUERY)
        collections = parse_collections(data)

        return CriticalPayload(featured_collection=collections[0] if collections else None)

    def load_deferred_data(self) -> Dict[str, "asyncio.Future[Any]"]:
        """Start the deferred queries without awaiting them"""
        return {
            COLLECTIONS: asyncio.ensure_future(
                self._downgrade_to_none(COLLECTIONS, self._fetch_collections())
            ),
            RECOMMENDED_PRODUCTS: asyncio.ensure_future(
                self._downgrade_to_none(RECOMMENDED_PRODUCTS, self._fetch_recommended_products())
            ),
        }

    async def _fetch_collections(self) -> List[Collection]:
        data = await self.storefront.query(COLLECTIONS_QUERY)
        return parse_collections(data)

    async def _fetch_recommended_products(self) -> List[Product]:
        data = await self.storefront.query(RECOMMENDED_PRODUCTS_QUERY)
        return parse_products(data)

    @staticmethod
    async def _downgrade_to_none(name: str, operation: Awaitable[Any]) -> Optional[Any]:
        try:
            return await operation
        except Exception as e:
            logger.error(f"Deferred query '{name}' failed, rendering without it: {e}")
            return None
