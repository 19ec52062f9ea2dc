# orders/admin_urls.py

"""
ORDERS BACK-OFFICE URLS (mounted at /api/admin/)
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from orders.views import (
    AdminDashboardView,
    AdminOrderViewSet,
    AdminQRCodeImageView,
    AdminReturnViewSet,
)

app_name = "orders-admin"

router = SimpleRouter()

router.register(r"orders", AdminOrderViewSet, basename="orders")
router.register(r"returns", AdminReturnViewSet, basename="returns")

urlpatterns = [
    path("orders/qr-code/<str:code>/", AdminQRCodeImageView.as_view(), name="order-qr-code"),
    path("dashboard/", AdminDashboardView.as_view(), name="dashboard"),
    path("", include(router.urls)),
]
