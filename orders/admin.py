# orders/admin.py
"""
Django admin registration for orders and returns (superuser console).
Day-to-day order work goes through /api/admin/orders/ and /api/admin/returns/.
"""

from __future__ import annotations

from django.contrib import admin

from orders.models import Order, OrderItem, QRCode, Return, ShippingAddress, TemporaryOrder


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "scent", "quantity", "price", "audio_url", "text_message", "animation_id")
    raw_id_fields = ("product",)


class ShippingAddressInline(admin.StackedInline):
    model = ShippingAddress
    extra = 0
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "status", "total", "created_at")
    list_filter = ("status",)
    search_fields = ("id", "user__email", "user__name", "stripe_session_id")
    readonly_fields = (
        "stripe_session_id",
        "stripe_payment_intent_id",
        "stripe_refund_id",
        "refunded_at",
        "refund_amount",
        "created_at",
        "updated_at",
    )
    inlines = [OrderItemInline, ShippingAddressInline]


@admin.register(QRCode)
class QRCodeAdmin(admin.ModelAdmin):
    list_display = ("code", "order_item", "created_at")
    search_fields = ("code",)
    raw_id_fields = ("order_item",)


@admin.register(Return)
class ReturnAdmin(admin.ModelAdmin):
    list_display = ("id", "order_item", "user", "status", "refund_status", "created_at")
    list_filter = ("status", "refund_status")
    search_fields = ("user__email", "reason", "tracking_number")
    raw_id_fields = ("order_item",)


@admin.register(TemporaryOrder)
class TemporaryOrderAdmin(admin.ModelAdmin):
    list_display = ("order_id", "user", "created_at")
    readonly_fields = ("order_data", "created_at", "updated_at")
