"""
Utility functions and helpers
"""

from .helpers import (
    menu_item_path,
    collection_path,
    product_path,
    format_money,
    truncate_list
)

__all__ = [
    "menu_item_path",
    "collection_path",
    "product_path",
    "format_money",
    "truncate_list"
]
