# products/views/__init__.py

from .admin_catalog import AdminCategoryViewSet, AdminProductViewSet, AdminScentViewSet
from .catalog import CategoryViewSet, ProductViewSet, ScentViewSet
from .reviews import ReviewViewSet
from .uploads import AdminImageUploadView, AdminModelUploadView, AudioUploadView

__all__ = [
    "AdminCategoryViewSet",
    "AdminImageUploadView",
    "AdminModelUploadView",
    "AdminProductViewSet",
    "AdminScentViewSet",
    "AudioUploadView",
    "CategoryViewSet",
    "ProductViewSet",
    "ReviewViewSet",
    "ScentViewSet",
]
