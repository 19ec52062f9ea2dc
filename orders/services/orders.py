# orders/services/orders.py

"""
ORDER SERVICE

- cancel_order(): owner cancellation (PENDING / PROCESSING only)
  a Stripe refund is attempted when the order has a payment intent;
  a refund failure is logged and the order is cancelled anyway
- create_manual_order(): admin back-office order (starts in PROCESSING)
- set_status(): admin status update
- order_queryset() / admin_order_queryset(): list helpers
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from orders.models import Order, OrderItem, QRCode, ShippingAddress
from orders.services.qr import generate_secure_qr_code
from products.models import Product, Scent
from public.services import stripe_gateway

logger = logging.getLogger(__name__)

User = get_user_model()


# ============================================================
# DOMAIN ERRORS
# ============================================================

class OrderError(Exception):
    pass


class OrderNotCancellableError(OrderError):
    pass


class UnknownUserError(OrderError):
    pass


class UnknownCatalogItemError(OrderError):
    pass


_NOT_CANCELLABLE_MESSAGES = {
    Order.STATUS_SHIPPED: "Order has already been shipped",
    Order.STATUS_DELIVERED: "Order has already been delivered",
    Order.STATUS_CANCELLED: "Order has already been cancelled",
}


# ============================================================
# QUERIES
# ============================================================

def order_queryset():
    return (
        Order.objects.select_related("user", "shipping_address")
        .prefetch_related(
            "items__product__images",
            "items__product__category",
            "items__scent",
            "items__qr_code",
            "items__returns",
        )
    )


def admin_order_queryset(*, search: str = "", status: str = ""):
    qs = order_queryset().order_by("-created_at")
    search = (search or "").strip()
    if search:
        qs = qs.filter(Q(user__name__icontains=search) | Q(user__email__icontains=search))
    if status:
        qs = qs.filter(status=status)
    return qs


# ============================================================
# CANCEL
# ============================================================

def _refund_on_cancel(order: Order) -> bool:
    try:
        refund = stripe_gateway.create_refund(
            payment_intent=order.stripe_payment_intent_id,
            metadata={"orderId": order.id, "reason": "order_cancelled"},
        )
    except (stripe_gateway.PaymentGatewayError, stripe_gateway.PaymentConfigurationError):
        logger.exception(
            "Refund failed during cancellation, cancelling anyway",
            extra={"order_id": str(order.id)},
        )
        return False

    order.stripe_refund_id = refund.get("id") or ""
    order.refunded_at = timezone.now()
    order.refund_amount = stripe_gateway.from_cents(refund.get("amount"))
    return True


def cancel_order(*, order: Order) -> tuple[Order, bool]:
    """
    Returns (order, refund_processed).

    CANCELLED is committed under the row lock; the Stripe refund runs after
    the lock is released.
    """
    with transaction.atomic():
        order = Order.objects.select_for_update().get(pk=order.pk)

        if not order.is_cancellable:
            raise OrderNotCancellableError(
                _NOT_CANCELLABLE_MESSAGES.get(order.status, "Order can no longer be cancelled")
            )

        order.status = Order.STATUS_CANCELLED
        order.save(update_fields=["status", "updated_at"])

    refund_processed = False
    if order.stripe_payment_intent_id:
        refund_processed = _refund_on_cancel(order)
        if refund_processed:
            order.save(update_fields=["stripe_refund_id", "refunded_at", "refund_amount", "updated_at"])

    logger.info(
        "Order cancelled",
        extra={"order_id": str(order.id), "refund_processed": refund_processed},
    )
    return order, refund_processed


# ============================================================
# ADMIN
# ============================================================

@transaction.atomic
def create_manual_order(*, user_id, items: list[dict], shipping_address: dict) -> Order:
    user = User.objects.filter(pk=user_id).first()
    if user is None:
        raise UnknownUserError("User not found")

    product_ids = {item["product_id"] for item in items}
    products = Product.objects.alive().in_bulk(product_ids)
    if len(products) != len(product_ids):
        raise UnknownCatalogItemError("Unknown product")

    scent_ids = {item["scent_id"] for item in items if item.get("scent_id")}
    if Scent.objects.filter(pk__in=scent_ids).count() != len(scent_ids):
        raise UnknownCatalogItemError("Unknown scent")

    lines = []
    total = Decimal("0.00")
    for item in items:
        product = products[item["product_id"]]
        price = item.get("price")
        if price is None:
            price = product.price
        lines.append((item, product, price))
        total += price * item["quantity"]

    order = Order.objects.create(user=user, status=Order.STATUS_PROCESSING, total=total)

    for item, product, price in lines:
        order_item = OrderItem.objects.create(
            order=order,
            product=product,
            scent_id=item.get("scent_id"),
            quantity=item["quantity"],
            price=price,
            audio_url=item.get("audio_url") or "",
            text_message=item.get("text_message") or "",
        )
        QRCode.objects.create(order_item=order_item, code=generate_secure_qr_code())

    ShippingAddress.objects.create(
        order=order,
        street=shipping_address.get("street", ""),
        city=shipping_address.get("city", ""),
        state=shipping_address.get("state", ""),
        zip_code=shipping_address.get("zip_code", ""),
        country=shipping_address.get("country") or "FR",
    )

    logger.info("Manual order created", extra={"order_id": str(order.id), "user_id": str(user.id)})
    return order


def set_status(*, order: Order, status: str) -> Order:
    previous = order.status
    order.status = status
    order.save(update_fields=["status", "updated_at"])

    logger.info(
        "Order status updated",
        extra={"order_id": str(order.id), "from_status": previous, "to_status": status},
    )
    return order
