# orders/models/order_item.py

import uuid
from decimal import Decimal

from django.db import models

from products.models import Product, Scent

from .order import Order


class OrderItem(models.Model):
    """
    One personalized candle in an order.

    price is the unit price snapshot at purchase time.
    audio_url / text_message / animation_id drive the AR page.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order = models.ForeignKey(Order, on_delete=models.CASCADE, related_name="items")
    product = models.ForeignKey(Product, on_delete=models.PROTECT, related_name="order_items")
    scent = models.ForeignKey(
        Scent,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="order_items",
    )

    quantity = models.PositiveIntegerField(default=1)
    price = models.DecimalField(max_digits=10, decimal_places=2)

    audio_url = models.URLField(max_length=500, blank=True, default="")
    text_message = models.TextField(blank=True, default="")
    animation_id = models.CharField(max_length=64, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["created_at"]

    def __str__(self):
        return f"{self.product_id} x{self.quantity}"

    @property
    def line_total(self) -> Decimal:
        return Decimal(self.price) * self.quantity
