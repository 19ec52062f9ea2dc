# products/urls.py

"""
CATALOG URLS (mounted at /api/)

- products/ , products/{id}/ , products/{id}/reviews/
- categories/ , scents/
- reviews/{id}/
- uploads/audio/
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from products.views import (
    AudioUploadView,
    CategoryViewSet,
    ProductViewSet,
    ReviewViewSet,
    ScentViewSet,
)

app_name = "catalog"

router = SimpleRouter()

router.register(r"products", ProductViewSet, basename="products")
router.register(r"categories", CategoryViewSet, basename="categories")
router.register(r"scents", ScentViewSet, basename="scents")
router.register(r"reviews", ReviewViewSet, basename="reviews")

urlpatterns = [
    path("uploads/audio/", AudioUploadView.as_view(), name="upload-audio"),
    path("", include(router.urls)),
]
