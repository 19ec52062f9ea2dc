# orders/models/return_request.py

import uuid
from datetime import timedelta

from django.conf import settings
from django.db import models

from .order_item import OrderItem

RETURN_WINDOW = timedelta(days=30)


class Return(models.Model):
    """
    Post-delivery return request for one order item.

    Status flow (admin driven):
    REQUESTED -> APPROVED | REJECTED
    APPROVED  -> RETURN_SHIPPING_SENT -> RETURN_IN_TRANSIT -> RETURN_DELIVERED
              -> PROCESSING -> COMPLETED   (refund moves it to COMPLETED directly)

    Refund status is tracked separately:
    PENDING -> PROCESSING -> COMPLETED | FAILED
    """

    STATUS_REQUESTED = "REQUESTED"
    STATUS_APPROVED = "APPROVED"
    STATUS_REJECTED = "REJECTED"
    STATUS_PROCESSING = "PROCESSING"
    STATUS_RETURN_SHIPPING_SENT = "RETURN_SHIPPING_SENT"
    STATUS_RETURN_IN_TRANSIT = "RETURN_IN_TRANSIT"
    STATUS_RETURN_DELIVERED = "RETURN_DELIVERED"
    STATUS_COMPLETED = "COMPLETED"

    STATUS_CHOICES = [
        (STATUS_REQUESTED, "Requested"),
        (STATUS_APPROVED, "Approved"),
        (STATUS_REJECTED, "Rejected"),
        (STATUS_PROCESSING, "Processing"),
        (STATUS_RETURN_SHIPPING_SENT, "Return label sent"),
        (STATUS_RETURN_IN_TRANSIT, "Return in transit"),
        (STATUS_RETURN_DELIVERED, "Return delivered"),
        (STATUS_COMPLETED, "Completed"),
    ]

    # a new request is refused while one of these exists for the item
    OPEN_STATUSES = (STATUS_REQUESTED, STATUS_APPROVED, STATUS_PROCESSING)

    REFUND_PENDING = "PENDING"
    REFUND_PROCESSING = "PROCESSING"
    REFUND_COMPLETED = "COMPLETED"
    REFUND_FAILED = "FAILED"

    REFUND_STATUS_CHOICES = [
        (REFUND_PENDING, "Pending"),
        (REFUND_PROCESSING, "Processing"),
        (REFUND_COMPLETED, "Completed"),
        (REFUND_FAILED, "Failed"),
    ]

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    order_item = models.ForeignKey(OrderItem, on_delete=models.CASCADE, related_name="returns")
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="returns",
    )

    reason = models.CharField(max_length=255)
    description = models.TextField(blank=True, default="")

    status = models.CharField(max_length=32, choices=STATUS_CHOICES, default=STATUS_REQUESTED)
    refund_status = models.CharField(
        max_length=16,
        choices=REFUND_STATUS_CHOICES,
        default=REFUND_PENDING,
    )
    refund_amount = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)

    admin_note = models.TextField(blank=True, default="")
    return_instructions = models.TextField(blank=True, default="")
    return_address = models.TextField(blank=True, default="")
    return_deadline = models.DateTimeField(null=True, blank=True)

    tracking_number = models.CharField(max_length=120, blank=True, default="")
    carrier = models.CharField(max_length=120, blank=True, default="")
    tracking_url = models.URLField(max_length=500, blank=True, default="")

    shipped_at = models.DateTimeField(null=True, blank=True)
    delivered_at = models.DateTimeField(null=True, blank=True)
    processed_at = models.DateTimeField(null=True, blank=True)
    refunded_at = models.DateTimeField(null=True, blank=True)
    stripe_refund_id = models.CharField(max_length=255, blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["status"]),
            models.Index(fields=["order_item", "status"]),
        ]

    def __str__(self):
        return f"return:{self.id} | {self.status}"
