import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from storefront.config import settings
from storefront.models.schemas import FooterView, Menu, QuickLink
from storefront.services.queries import HEADER_QUERY
from storefront.utils.helpers import menu_item_path

logger = logging.getLogger(__name__)


class FooterBuilder:
    def __init__(self, storefront=None):
        self.storefront = storefront

    async def load_menu(self) -> Optional[Menu]:
        """Fetch the header menu; failures propagate like any critical query"""
        data = await self.storefront.query(
            HEADER_QUERY, {"headerMenuHandle": settings.HEADER_MENU_HANDLE}
        )
        return self.parse_menu(data)

    @staticmethod
    def parse_menu(data: Dict[str, Any]) -> Optional[Menu]:
        menu = (data or {}).get("menu")
        if not isinstance(menu, dict):
            return None
        try:
            return Menu.model_validate(menu)
        except ValidationError as e:
            logger.error(f"Ignoring malformed menu: {e}")
            return None

    @staticmethod
    def quick_links(menu: Optional[Menu]) -> List[QuickLink]:
        if menu is None:
            return []
        return [
            QuickLink(id=item.id, title=item.title, path=menu_item_path(item.url))
            for item in menu.items
        ]

    def build(self, menu: Optional[Menu], year: Optional[int] = None) -> FooterView:
        year = year or datetime.now().year
        return FooterView(
            brand_name=settings.STORE_NAME,
            address=settings.STORE_ADDRESS,
            phone=settings.STORE_PHONE,
            quick_links=self.quick_links(menu),
            social_media=list(settings.SOCIAL_PLATFORMS),
            copyright=f"© {year} {settings.STORE_NAME}. All rights reserved."
        )

    async def render(self) -> FooterView:
        return self.build(await self.load_menu())
