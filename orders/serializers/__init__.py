# orders/serializers/__init__.py

from .order import (
    AdminOrderSerializer,
    ManualOrderSerializer,
    OrderSerializer,
    OrderStatusSerializer,
)
from .qr import QRCodeCreateSerializer, QRCodeResponseSerializer
from .returns import (
    AdminReturnSerializer,
    ReturnCreateSerializer,
    ReturnRefundSerializer,
    ReturnSerializer,
    ReturnTrackingSerializer,
    ReturnUpdateSerializer,
)

__all__ = [
    "AdminOrderSerializer",
    "AdminReturnSerializer",
    "ManualOrderSerializer",
    "OrderSerializer",
    "OrderStatusSerializer",
    "QRCodeCreateSerializer",
    "QRCodeResponseSerializer",
    "ReturnCreateSerializer",
    "ReturnRefundSerializer",
    "ReturnSerializer",
    "ReturnTrackingSerializer",
    "ReturnUpdateSerializer",
]
