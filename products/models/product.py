# products/models/product.py

import uuid
from decimal import Decimal

from django.core.exceptions import ValidationError
from django.db import models

from .category import Category
from .scent import Scent
from .soft_delete import SoftDeleteModel


class Product(SoftDeleteModel):
    """
    A personalizable candle.

    LOCALIZATION:
    - Base columns hold the French copy
    - *_en columns are optional; empty means "fall back to French"

    PERSONALIZATION:
    - message_type tells the storefront whether the buyer records audio or types text
    - ar_animation is the AR page default when an order item has no animation_id
    """

    MESSAGE_AUDIO = "audio"
    MESSAGE_TEXT = "text"

    MESSAGE_TYPE_CHOICES = (
        (MESSAGE_AUDIO, "Audio"),
        (MESSAGE_TEXT, "Text"),
    )

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    category = models.ForeignKey(
        Category,
        on_delete=models.PROTECT,
        related_name="products",
    )
    scent = models.ForeignKey(
        Scent,
        on_delete=models.PROTECT,
        related_name="products",
    )

    name = models.CharField(max_length=255, db_index=True)
    name_en = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField()
    description_en = models.TextField(blank=True, default="")
    sub_title = models.CharField(max_length=255)
    sub_title_en = models.CharField(max_length=255, blank=True, default="")
    slogan = models.CharField(max_length=255)
    slogan_en = models.CharField(max_length=255, blank=True, default="")

    price = models.DecimalField(max_digits=10, decimal_places=2)

    ar_animation = models.CharField(max_length=64, default="default")
    message_type = models.CharField(
        max_length=8,
        choices=MESSAGE_TYPE_CHOICES,
        default=MESSAGE_AUDIO,
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"]),
            models.Index(fields=["price"]),
        ]

    def __str__(self):
        return self.name

    def clean(self):
        if self.price is None or Decimal(self.price) <= 0:
            raise ValidationError("Price must be greater than zero")
