# orders/models/qr_code.py

import uuid

from django.db import models

from .order_item import OrderItem


class QRCode(models.Model):
    """
    Links a physical candle to its AR page: {APP_URL}/ar/{code}.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_item = models.OneToOneField(OrderItem, on_delete=models.CASCADE, related_name="qr_code")
    code = models.CharField(max_length=32, unique=True, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return self.code
