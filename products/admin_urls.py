# products/admin_urls.py

"""
CATALOG BACK-OFFICE URLS (mounted at /api/admin/)
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import (
    AdminCategoryViewSet,
    AdminImageUploadView,
    AdminModelUploadView,
    AdminProductViewSet,
    AdminScentViewSet,
)

app_name = "catalog-admin"

router = SimpleRouter()

router.register(r"products", AdminProductViewSet, basename="products")
router.register(r"categories", AdminCategoryViewSet, basename="categories")
router.register(r"scents", AdminScentViewSet, basename="scents")

urlpatterns = [
    path("uploads/image/", AdminImageUploadView.as_view(), name="upload-image"),
    path("uploads/model/", AdminModelUploadView.as_view(), name="upload-model"),
    path("", include(router.urls)),
]
