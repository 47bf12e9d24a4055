import json
import logging
from typing import AsyncIterator, Optional

from storefront.config import settings
from storefront.models.schemas import HomeFrame
from storefront.services.loader import COLLECTIONS, RECOMMENDED_PRODUCTS, PageLoadResult
from storefront.services.rendering import (
    CollectionsGridRegion,
    FeaturedCollectionRegion,
    ProgressiveRenderController,
    RecommendedProductsRegion,
    RenderListener,
)

logger = logging.getLogger(__name__)


class HomePage:
    """Home page for one request: the frame renders immediately, deferred regions follow"""

    def __init__(self, load_result: PageLoadResult, on_render: Optional[RenderListener] = None):
        self.load_result = load_result
        self.controller = ProgressiveRenderController(on_render)
        self.featured = FeaturedCollectionRegion()
        self.collections = CollectionsGridRegion()
        self.recommended = RecommendedProductsRegion()

    @property
    def title(self) -> str:
        return f"{settings.STORE_NAME} | Home"

    def render_frame(self) -> HomeFrame:
        deferred = self.load_result.deferred_data
        placeholders = [
            self.controller.mount(self.collections, deferred[COLLECTIONS]),
            self.controller.mount(self.recommended, deferred[RECOMMENDED_PRODUCTS]),
        ]

        return HomeFrame(
            title=self.title,
            featured_collection=self.featured.render(self.load_result.critical_data.featured_collection),
            regions=placeholders
        )

    async def stream(self) -> AsyncIterator[str]:
        """NDJSON lines: the frame first, then one line per region as it settles"""
        frame = self.render_frame()
        yield json.dumps({"type": "frame", **frame.model_dump(mode="json")}) + "\n"

        async for view in self.controller.updates():
            logger.debug(f"Region '{view.region}' settled as {view.state.value}")
            yield json.dumps({"type": "region", **view.model_dump(mode="json")}) + "\n"
