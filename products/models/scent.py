# products/models/scent.py

import uuid

from django.db import models

from .category import hex_color_validator


class Scent(models.Model):
    """
    Fragrance a candle is poured with.

    Hard-deleted (no deleted_at): deletion is refused while any product uses it.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255, unique=True)
    description = models.TextField(blank=True, default="")
    icon = models.CharField(max_length=64, blank=True, default="")
    color = models.CharField(max_length=7, default="#D97706", validators=[hex_color_validator])

    # Olfactory notes, e.g. ["vanille bourbon", "fève tonka"]
    notes = models.JSONField(default=list, blank=True)

    model3d_url = models.URLField(max_length=500, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name
