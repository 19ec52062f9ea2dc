# orders/views/__init__.py

from .admin_orders import (
    AdminDashboardView,
    AdminOrderViewSet,
    AdminQRCodeImageView,
    AdminReturnViewSet,
)
from .checkout import (
    CheckoutConfirmView,
    CheckoutSessionStatusView,
    CheckoutSessionView,
    StripeWebhookView,
)
from .orders import OrderViewSet
from .qr import QRCodeView
from .returns import ReturnViewSet

__all__ = [
    "AdminDashboardView",
    "AdminOrderViewSet",
    "AdminQRCodeImageView",
    "AdminReturnViewSet",
    "CheckoutConfirmView",
    "CheckoutSessionStatusView",
    "CheckoutSessionView",
    "OrderViewSet",
    "QRCodeView",
    "ReturnViewSet",
    "StripeWebhookView",
]
