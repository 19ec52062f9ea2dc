# orders/apps.py

"""
ORDERS APP CONFIG

- Orders, items, shipping addresses and per-item QR codes
- Checkout scratch rows (TemporaryOrder)
- Returns and refunds
- Admin dashboard
"""

from django.apps import AppConfig


class OrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "orders"
    verbose_name = "Orders & Returns"
