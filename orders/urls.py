# orders/urls.py

"""
ORDER URLS (mounted at /api/)

- orders/ , orders/{id}/ , orders/{id}/cancel/ , orders/{id}/invoice/
- returns/
- qr/
- checkout/session/ , checkout/webhook/ , checkout/confirm/ , checkout/session/{session_id}/
"""

from django.urls import include, path
from rest_framework.routers import SimpleRouter

from orders.views import (
    CheckoutConfirmView,
    CheckoutSessionStatusView,
    CheckoutSessionView,
    OrderViewSet,
    QRCodeView,
    ReturnViewSet,
    StripeWebhookView,
)

app_name = "orders"

router = SimpleRouter()

router.register(r"orders", OrderViewSet, basename="orders")
router.register(r"returns", ReturnViewSet, basename="returns")

urlpatterns = [
    path("qr/", QRCodeView.as_view(), name="qr"),
    path("checkout/session/", CheckoutSessionView.as_view(), name="checkout-session"),
    path(
        "checkout/session/<str:session_id>/",
        CheckoutSessionStatusView.as_view(),
        name="checkout-session-status",
    ),
    path("checkout/webhook/", StripeWebhookView.as_view(), name="checkout-webhook"),
    path("checkout/confirm/", CheckoutConfirmView.as_view(), name="checkout-confirm"),
    path("", include(router.urls)),
]
