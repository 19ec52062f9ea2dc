"""
PATH: orders/models/__init__.py
"""

from .order import Order
from .order_item import OrderItem
from .qr_code import QRCode
from .return_request import RETURN_WINDOW, Return
from .shipping_address import ShippingAddress
from .temporary_order import TemporaryOrder

__all__ = [
    "Order",
    "OrderItem",
    "QRCode",
    "RETURN_WINDOW",
    "Return",
    "ShippingAddress",
    "TemporaryOrder",
]
