"""
Progressive rendering of independently-updating page regions.

A region renders a placeholder as soon as it is mounted. When the future it
is bound to settles, only that region is re-rendered and the new view is
published to listeners and to the update stream.
"""

import asyncio
import logging
from typing import Any, AsyncIterator, Callable, Dict, List, Optional, Set

from storefront.config import settings
from storefront.models.schemas import (
    Collection, CollectionTile, Product, ProductTile, RegionState, RegionView
)
from storefront.utils.helpers import collection_path, format_money, product_path, truncate_list

logger = logging.getLogger(__name__)

RenderListener = Callable[[RegionView], None]


class Region:
    name = "region"

    def placeholder(self) -> RegionView:
        return RegionView(region=self.name, state=RegionState.LOADING, data={"message": "Loading..."})

    def resolve(self, value: Any) -> RegionView:
        raise NotImplementedError


class FeaturedCollectionRegion(Region):
    name = "featured_collection"

    def render(self, collection: Optional[Collection]) -> Optional[RegionView]:
        """Render the featured collection, or nothing when there is none"""
        if collection is None:
            return None

        return RegionView(
            region=self.name,
            state=RegionState.READY,
            data={
                "title": collection.title,
                "url": collection_path(collection.handle),
                "image": collection.image.model_dump() if collection.image else None,
            }
        )

    def resolve(self, value: Optional[Collection]) -> Optional[RegionView]:
        return self.render(value)


class CollectionsGridRegion(Region):
    name = "collections"

    def __init__(self, max_tiles: int = settings.MAX_COLLECTION_TILES):
        self.max_tiles = max_tiles

    def resolve(self, collections: Optional[List[Collection]]) -> RegionView:
        tiles = [
            CollectionTile(
                id=collection.id,
                title=collection.title,
                url=collection_path(collection.handle),
                image=collection.image
            )
            for collection in truncate_list(collections or [], self.max_tiles)
        ]

        return RegionView(
            region=self.name,
            state=RegionState.READY if tiles else RegionState.EMPTY,
            data={"heading": "Collections", "tiles": [tile.model_dump() for tile in tiles]}
        )


class RecommendedProductsRegion(Region):
    """
    Product list with a detail pane for the selected product.

    The selection defaults to the first product the first time a non-empty list
    arrives, and afterwards changes only through select().
    """

    name = "recommended_products"
    EMPTY_MESSAGE = "No recommended products right now."

    def __init__(self, max_products: int = settings.MAX_RECOMMENDED_PRODUCTS):
        self.max_products = max_products
        self.products: List[Product] = []
        self.selected: Optional[Product] = None
        self.resolved = False

    def resolve(self, products: Optional[List[Product]]) -> RegionView:
        self.products = truncate_list(products or [], self.max_products)
        self.resolved = True
        if self.selected is None and self.products:
            self.selected = self.products[0]
        return self.render()

    def select(self, product_id: str) -> RegionView:
        for product in self.products:
            if product.id == product_id:
                self.selected = product
                return self.render()
        raise KeyError(f"Product {product_id} is not in the recommended list")

    def render(self) -> RegionView:
        if not self.resolved:
            return self.placeholder()

        if not self.products:
            return RegionView(
                region=self.name,
                state=RegionState.EMPTY,
                data={"heading": "Recommended Products", "message": self.EMPTY_MESSAGE, "products": []}
            )

        tiles = [
            ProductTile(
                id=product.id,
                title=product.title,
                description=product.description or "No description available",
                price=format_money(product.price_range.min_variant_price) if product.price_range else None,
                url=product_path(product.handle),
                selected=product.id == self.selected.id
            )
            for product in self.products
        ]

        return RegionView(
            region=self.name,
            state=RegionState.READY,
            data={
                "heading": "Recommended Products",
                "selected_id": self.selected.id,
                "image": self._selected_image(),
                "products": [tile.model_dump() for tile in tiles],
            }
        )

    def _selected_image(self) -> Optional[Dict[str, Any]]:
        if not self.selected.images:
            return None
        image = self.selected.images[0].model_dump()
        image["alt_text"] = image.get("alt_text") or self.selected.title
        return image


class ProgressiveRenderController:
    """Binds regions to futures and re-renders each region when its future settles"""

    def __init__(self, on_render: Optional[RenderListener] = None):
        self.regions: Dict[str, Region] = {}
        self.views: Dict[str, RegionView] = {}
        self._listeners: List[RenderListener] = [on_render] if on_render else []
        self._pending: Set[str] = set()
        self._updates: "asyncio.Queue[Optional[RegionView]]" = asyncio.Queue()

    @property
    def pending(self) -> Set[str]:
        return set(self._pending)

    def mount(self, region: Region, future: "asyncio.Future[Any]") -> RegionView:
        """Render the region's placeholder now and re-render it once the future settles"""
        self.regions[region.name] = region
        self._pending.add(region.name)
        view = region.placeholder()
        self.views[region.name] = view
        future.add_done_callback(lambda settled: self._on_settled(region, settled))
        return view

    def select_product(self, product_id: str) -> RegionView:
        region = self.regions.get(RecommendedProductsRegion.name)
        if not isinstance(region, RecommendedProductsRegion):
            raise KeyError("No recommended products region is mounted")
        view = region.select(product_id)
        self._publish(view)
        return view

    async def updates(self) -> AsyncIterator[RegionView]:
        """Yield re-rendered regions in settle order until every mounted region has settled"""
        while self._pending or not self._updates.empty():
            view = await self._updates.get()
            if view is None:
                continue
            yield view

    async def drain(self) -> List[RegionView]:
        return [view async for view in self.updates()]

    def _on_settled(self, region: Region, future: "asyncio.Future[Any]"):
        try:
            if future.cancelled():
                logger.warning(f"Region '{region.name}' was cancelled before its data arrived")
                return
            self._publish(region.resolve(future.result()))
        finally:
            self._pending.discard(region.name)
            if not self._pending:
                # wake a consumer blocked in updates()
                self._updates.put_nowait(None)

    def _publish(self, view: RegionView):
        self.views[view.region] = view
        # the update stream ends once every region has settled
        if self._pending:
            self._updates.put_nowait(view)
        for listener in self._listeners:
            listener(view)
