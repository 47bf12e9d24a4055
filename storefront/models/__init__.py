"""
Data models and schemas for the storefront service
"""

from .schemas import (
    Image,
    Money,
    PriceRange,
    Collection,
    Product,
    MenuItem,
    Menu,
    RegionState,
    RegionView,
    CollectionTile,
    ProductTile,
    PromoBar,
    HomeFrame,
    QuickLink,
    FooterView,
    FormStatus,
    FormState,
    ContactRequest,
    ContactResponse,
    ErrorResponse
)

__all__ = [
    "Image",
    "Money",
    "PriceRange",
    "Collection",
    "Product",
    "MenuItem",
    "Menu",
    "RegionState",
    "RegionView",
    "CollectionTile",
    "ProductTile",
    "PromoBar",
    "HomeFrame",
    "QuickLink",
    "FooterView",
    "FormStatus",
    "FormState",
    "ContactRequest",
    "ContactResponse",
    "ErrorResponse"
]
