# orders/models/temporary_order.py

import uuid

from django.conf import settings
from django.db import models


class TemporaryOrder(models.Model):
    """
    Checkout scratch row, written when the Stripe session is created and
    consumed (deleted) when the session is finalized.

    order_data = {"items": [...normalized cart items with qr codes...]}
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_id = models.UUIDField(unique=True)
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="temporary_orders",
    )
    order_data = models.JSONField(default=dict)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"temp:{self.order_id}"
