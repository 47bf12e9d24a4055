import logging
from typing import Optional, List, Any
from urllib.parse import urlparse

from storefront.models.schemas import Money

logger = logging.getLogger(__name__)


def menu_item_path(url: Optional[str]) -> str:
    """
    Derive an in-app link target from a menu item's absolute URL

    Args:
        url: Absolute URL from the Storefront API menu

    Returns:
        str: The URL's path component (scheme and host stripped)
    """
    if not url:
        return "/"

    path = urlparse(url).path
    return path or "/"


def collection_path(handle: str) -> str:
    """Route path for a collection handle"""
    return f"/collections/{handle}"


def product_path(handle: str) -> str:
    """Route path for a product handle"""
    return f"/products/{handle}"


def format_money(money: Optional[Money]) -> Optional[str]:
    """
    Format a Storefront API money value for display

    Args:
        money: Money value (amount is a decimal string)

    Returns:
        str: e.g. "24.00 USD", or None when the amount is missing or unparseable
    """
    if money is None:
        return None

    try:
        return f"{float(money.amount):.2f} {money.currency_code}"
    except (ValueError, TypeError):
        logger.warning(f"Unparseable price amount: {money.amount!r}")
        return None


def truncate_list(items: List[Any], max_items: int = 10) -> List[Any]:
    """
    Truncate a list to maximum number of items, preserving order

    Args:
        items: List to truncate
        max_items: Maximum number of items

    Returns:
        list: Truncated list
    """
    if not items:
        return []

    return list(items[:max_items])
