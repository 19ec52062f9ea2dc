# products/models/category.py

import uuid

from django.core.validators import RegexValidator
from django.db import models

from .soft_delete import SoftDeleteModel

hex_color_validator = RegexValidator(
    regex=r"^#[0-9A-Fa-f]{6}$",
    message="Color must be a hex code like #A1B2C3",
)


class Category(SoftDeleteModel):
    """
    Product grouping shown on the storefront (FR base fields + optional EN).
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    name_en = models.CharField(max_length=255, blank=True, default="")
    description = models.TextField(blank=True, default="")
    description_en = models.TextField(blank=True, default="")

    icon = models.CharField(max_length=64, blank=True, default="")
    color = models.CharField(max_length=7, default="#D97706", validators=[hex_color_validator])
    image_url = models.URLField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]
        verbose_name_plural = "categories"

    def __str__(self):
        return self.name
