"""
PATH: public/models.py

PUBLIC APP MODELS

Newsletter: one row per subscribed address (stored lower-cased).
"""

from __future__ import annotations

import uuid

from django.db import models


class Newsletter(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]

    def __str__(self):
        return self.email
