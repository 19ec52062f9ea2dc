# orders/services/returns.py

"""
RETURN SERVICE (customer requests + admin lifecycle)

Customer:
- request_return(): guards, in order
  1) item belongs to the user            -> ReturnNotFoundError
  2) order is DELIVERED                  -> ReturnNotAllowedError
  3) no open return for the item         -> ReturnNotAllowedError
  4) within RETURN_WINDOW of order.updated_at

Admin:
- update_return(): status + notes, stamps processed_at
- update_tracking(): tracking number without a status -> RETURN_SHIPPING_SENT
- refund_return(): Stripe refund for an APPROVED return with refund PENDING
  PENDING -> PROCESSING -> COMPLETED | FAILED
"""

from __future__ import annotations

import logging
from decimal import Decimal

from django.db import transaction
from django.utils import timezone

from orders.models import RETURN_WINDOW, Order, OrderItem, Return
from public.services import stripe_gateway

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class ReturnError(Exception):
    pass


class ReturnNotFoundError(ReturnError):
    pass


class ReturnNotAllowedError(ReturnError):
    pass


class RefundNotAllowedError(ReturnError):
    pass


class ReturnRefundFailedError(ReturnError):
    pass


def return_queryset():
    return Return.objects.select_related(
        "user",
        "order_item__order__user",
        "order_item__product",
        "order_item__scent",
    ).prefetch_related("order_item__product__images")


# ============================================================
# CUSTOMER
# ============================================================

@transaction.atomic
def request_return(*, user, order_item_id, reason: str, description: str = "") -> Return:
    item = (
        OrderItem.objects.select_related("order")
        .select_for_update()
        .filter(pk=order_item_id, order__user=user)
        .first()
    )
    if item is None:
        raise ReturnNotFoundError("Order item not found")

    order = item.order
    if order.status != Order.STATUS_DELIVERED:
        raise ReturnNotAllowedError("Only delivered orders can be returned")

    if item.returns.filter(status__in=Return.OPEN_STATUSES).exists():
        raise ReturnNotAllowedError("A return is already in progress for this item")

    if timezone.now() - order.updated_at > RETURN_WINDOW:
        raise ReturnNotAllowedError(
            f"Return window of {RETURN_WINDOW.days} days has expired"
        )

    ret = Return.objects.create(
        order_item=item,
        user=user,
        reason=reason.strip(),
        description=(description or "").strip(),
        status=Return.STATUS_REQUESTED,
        refund_status=Return.REFUND_PENDING,
    )

    logger.info(
        "Return requested",
        extra={"return_id": str(ret.id), "order_item_id": str(item.id), "user_id": str(user.id)},
    )
    return ret


# ============================================================
# ADMIN
# ============================================================

ADMIN_UPDATE_FIELDS = (
    "status",
    "admin_note",
    "refund_amount",
    "return_instructions",
    "return_address",
    "return_deadline",
)


def update_return(ret: Return, **changes) -> Return:
    for field in ADMIN_UPDATE_FIELDS:
        if field in changes:
            setattr(ret, field, changes[field])

    ret.processed_at = timezone.now()
    ret.save()

    logger.info("Return updated", extra={"return_id": str(ret.id), "status": ret.status})
    return ret


def update_tracking(
    ret: Return,
    *,
    tracking_number: str = "",
    carrier: str = "",
    tracking_url: str = "",
    status: str = "",
) -> Return:
    now = timezone.now()

    if tracking_number:
        ret.tracking_number = tracking_number
    if carrier:
        ret.carrier = carrier
    if tracking_url:
        ret.tracking_url = tracking_url

    if status:
        ret.status = status
    elif tracking_number:
        ret.status = Return.STATUS_RETURN_SHIPPING_SENT
        ret.shipped_at = now

    if ret.status == Return.STATUS_RETURN_DELIVERED and ret.delivered_at is None:
        ret.delivered_at = now

    ret.save()
    return ret


def refund_return(ret: Return, *, amount: Decimal | None = None) -> tuple[Return, dict]:
    """
    Refund one returned item through Stripe.

    PROCESSING is committed before the Stripe call.
    Returns (return, stripe_refund).
    """
    with transaction.atomic():
        ret = return_queryset().select_for_update(of=("self",)).get(pk=ret.pk)

        if ret.status != Return.STATUS_APPROVED:
            raise RefundNotAllowedError("Only approved returns can be refunded")
        if ret.refund_status != Return.REFUND_PENDING:
            raise RefundNotAllowedError("This return has already been refunded or is being processed")

        item = ret.order_item
        order = item.order
        if not order.stripe_payment_intent_id:
            raise RefundNotAllowedError("No payment found for this order")

        refund_amount = amount or ret.refund_amount or item.price
        ret.refund_status = Return.REFUND_PROCESSING
        ret.refund_amount = refund_amount
        ret.save(update_fields=["refund_status", "refund_amount", "updated_at"])

    try:
        refund = stripe_gateway.create_refund(
            payment_intent=order.stripe_payment_intent_id,
            amount=refund_amount,
            metadata={
                "returnId": ret.id,
                "orderItemId": item.id,
                "orderId": order.id,
                "reason": ret.reason,
            },
        )
    except (stripe_gateway.PaymentGatewayError, stripe_gateway.PaymentConfigurationError) as e:
        logger.exception("Return refund failed", extra={"return_id": str(ret.id)})
        ret.refund_status = Return.REFUND_FAILED
        ret.admin_note = f"Refund error: {e}"
        ret.save(update_fields=["refund_status", "admin_note", "updated_at"])
        raise ReturnRefundFailedError("Stripe refund failed") from e

    now = timezone.now()
    ret.stripe_refund_id = refund.get("id") or ""
    ret.refund_status = Return.REFUND_COMPLETED
    ret.status = Return.STATUS_COMPLETED
    ret.refunded_at = now
    ret.processed_at = now
    ret.admin_note = f"Automatic Stripe refund: {ret.stripe_refund_id}"
    ret.save()

    logger.info(
        "Return refunded",
        extra={"return_id": str(ret.id), "refund_id": ret.stripe_refund_id, "amount": str(refund_amount)},
    )
    return ret, refund
