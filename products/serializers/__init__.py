# products/serializers/__init__.py

from .category import AdminCategorySerializer, CategorySerializer
from .product import (
    AdminProductSerializer,
    ProductDetailSerializer,
    ProductSerializer,
    ProductWriteSerializer,
    with_rating,
)
from .review import ReviewSerializer, ReviewUpdateSerializer, ReviewWriteSerializer
from .scent import AdminScentSerializer, ScentSerializer

__all__ = [
    "AdminCategorySerializer",
    "AdminProductSerializer",
    "AdminScentSerializer",
    "CategorySerializer",
    "ProductDetailSerializer",
    "ProductSerializer",
    "ProductWriteSerializer",
    "ReviewSerializer",
    "ReviewUpdateSerializer",
    "ReviewWriteSerializer",
    "ScentSerializer",
    "with_rating",
]
