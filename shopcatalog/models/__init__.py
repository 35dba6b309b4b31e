"""SQLAlchemy ORM models — one file per table."""

from shopcatalog.models.category import Category
from shopcatalog.models.media import Media
from shopcatalog.models.product import Product
from shopcatalog.models.variant import Variant

__all__ = [
    "Category",
    "Media",
    "Product",
    "Variant",
]
