# users/admin_urls.py
"""
Back-office user routes, mounted at /api/admin/users/.
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from .views import AdminUserViewSet

app_name = "users-admin"

router = SimpleRouter()
router.register(r"", AdminUserViewSet, basename="admin-users")

urlpatterns = [
    path("", include(router.urls)),
]
