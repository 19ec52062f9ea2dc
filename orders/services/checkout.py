"""
PATH: orders/services/checkout.py

CHECKOUT ORCHESTRATION (Stripe)

start_checkout():
1) generate order_id + one QR code per cart item
2) persist a TemporaryOrder with the normalized items
3) create the Stripe Checkout Session (metadata = {orderId, userId})
   outside any transaction; a Stripe failure deletes the TemporaryOrder

finalize_session():
- shared by the webhook (checkout.session.completed) and the success-page confirm
- idempotent: an existing order for metadata.orderId is returned as-is
- atomic + select_for_update on the TemporaryOrder, so two racing callers
  create exactly one order
- confirmation email is sent after commit; a mail failure is logged only
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal

from django.db import transaction

from orders.models import Order, OrderItem, QRCode, ShippingAddress, TemporaryOrder
from orders.services.qr import generate_secure_qr_code
from products.models import Product, Scent
from public.services import mailer, stripe_gateway

logger = logging.getLogger(__name__)


# ============================================================
# DOMAIN ERRORS
# ============================================================

class CheckoutError(Exception):
    pass


class TemporaryOrderMissingError(CheckoutError):
    pass


class CatalogMismatchError(CheckoutError):
    pass


class SessionNotPaidError(CheckoutError):
    pass


# ============================================================
# START
# ============================================================

def normalize_items(items: list[dict]) -> list[dict]:
    """
    Validated cart items -> JSON-safe rows stored on the TemporaryOrder.
    Each row gets its QR code now so the code is known before payment.
    """
    rows = []
    for item in items:
        scent = item.get("selectedScent") or {}
        rows.append(
            {
                "id": str(item["id"]),
                "name": item["name"],
                "price": str(item["price"]),
                "quantity": int(item["quantity"]),
                "scentId": str(scent.get("id") or ""),
                "scentName": scent.get("name") or "",
                "audioUrl": item.get("audioUrl") or "",
                "textMessage": item.get("textMessage") or "",
                "animationId": item.get("animationId") or "",
                "qrCode": generate_secure_qr_code(),
            }
        )
    return rows


def start_checkout(*, user, items: list[dict]) -> dict:
    order_id = uuid.uuid4()

    temp = TemporaryOrder.objects.create(
        order_id=order_id,
        user=user,
        order_data={"items": normalize_items(items)},
    )
    try:
        session = stripe_gateway.create_checkout_session(
            items=items,
            order_id=str(order_id),
            user_id=str(user.id),
            customer_email=user.email,
        )
    except (stripe_gateway.PaymentGatewayError, stripe_gateway.PaymentConfigurationError):
        temp.delete()
        raise

    logger.info(
        "Checkout session created",
        extra={"order_id": str(order_id), "session_id": session.get("id")},
    )
    return {"sessionId": session.get("id"), "url": session.get("url")}


# ============================================================
# FINALIZE
# ============================================================

def _shipping_address(session: dict) -> dict:
    candidates = (
        (session.get("collected_information") or {}).get("shipping_details"),
        session.get("shipping_details"),
        session.get("customer_details"),
    )
    for source in candidates:
        address = (source or {}).get("address")
        if address:
            return address
    return {}


def _payment_intent_id(session: dict) -> str:
    intent = session.get("payment_intent")
    if isinstance(intent, dict):
        intent = intent.get("id")
    return intent or ""


def _check_catalog(rows: list[dict]) -> None:
    product_ids = {row["id"] for row in rows}
    scent_ids = {row["scentId"] for row in rows if row.get("scentId")}

    found_products = set(
        str(pk) for pk in Product.objects.filter(pk__in=product_ids).values_list("pk", flat=True)
    )
    if found_products != product_ids:
        raise CatalogMismatchError(f"Unknown products: {sorted(product_ids - found_products)}")

    found_scents = set(
        str(pk) for pk in Scent.objects.filter(pk__in=scent_ids).values_list("pk", flat=True)
    )
    if found_scents != scent_ids:
        raise CatalogMismatchError(f"Unknown scents: {sorted(scent_ids - found_scents)}")


def _create_order(session: dict, temp: TemporaryOrder) -> Order:
    rows = (temp.order_data or {}).get("items") or []
    _check_catalog(rows)

    order = Order.objects.create(
        id=temp.order_id,
        user_id=temp.user_id,
        status=Order.STATUS_PROCESSING,
        total=stripe_gateway.from_cents(session.get("amount_total")),
        stripe_session_id=session.get("id") or "",
        stripe_payment_intent_id=_payment_intent_id(session),
    )

    for row in rows:
        item = OrderItem.objects.create(
            order=order,
            product_id=row["id"],
            scent_id=row.get("scentId") or None,
            quantity=row["quantity"],
            price=Decimal(row["price"]),
            audio_url=row.get("audioUrl") or "",
            text_message=row.get("textMessage") or "",
            animation_id=row.get("animationId") or "",
        )
        QRCode.objects.create(order_item=item, code=row.get("qrCode") or generate_secure_qr_code())

    address = _shipping_address(session)
    ShippingAddress.objects.create(
        order=order,
        street=address.get("line1") or "",
        city=address.get("city") or "",
        state=address.get("state") or "",
        zip_code=address.get("postal_code") or "",
        country=address.get("country") or "FR",
    )
    return order


def _notify(order: Order) -> None:
    try:
        mailer.send_order_confirmation(order)
    except (mailer.EmailConfigurationError, mailer.EmailDeliveryError):
        logger.exception("Order confirmation email failed", extra={"order_id": str(order.id)})


def finalize_session(session: dict) -> tuple[Order, bool]:
    """
    Returns (order, created).
    """
    metadata = session.get("metadata") or {}
    order_id = metadata.get("orderId")
    if not order_id:
        raise CheckoutError("Session metadata has no orderId")

    payment_status = session.get("payment_status")
    if payment_status and payment_status not in ("paid", "no_payment_required"):
        raise SessionNotPaidError(f"Session is not paid (payment_status={payment_status})")

    with transaction.atomic():
        temp = TemporaryOrder.objects.select_for_update().filter(order_id=order_id).first()

        existing = Order.objects.filter(pk=order_id).first()
        if existing is not None:
            return existing, False

        if temp is None:
            raise TemporaryOrderMissingError(f"No pending checkout data for order {order_id}")

        order = _create_order(session, temp)
        temp.delete()

    logger.info(
        "Order finalized",
        extra={"order_id": str(order.id), "session_id": session.get("id")},
    )
    _notify(order)
    return order, True


def session_status(session_id: str) -> dict:
    session = stripe_gateway.retrieve_checkout_session(session_id)
    order_id = (session.get("metadata") or {}).get("orderId")
    processed = bool(order_id) and Order.objects.filter(pk=order_id).exists()
    return {"processed": processed, "status": session.get("status")}
