# public/services/stripe_gateway.py
from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

import stripe
from django.conf import settings

logger = logging.getLogger(__name__)

FREE_SHIPPING_LABEL = "Livraison gratuite"


class PaymentConfigurationError(RuntimeError):
    pass


class PaymentGatewayError(RuntimeError):
    pass


class WebhookSignatureError(ValueError):
    pass


def _stripe_cfg() -> dict:
    payments = getattr(settings, "PAYMENTS", {}) or {}
    cfg = payments.get("STRIPE") if isinstance(payments, dict) else None
    return cfg if isinstance(cfg, dict) else {}


def _get_secret_key() -> str:
    sk = (_stripe_cfg().get("SECRET_KEY") or "").strip()
    if not sk:
        raise PaymentConfigurationError(
            "STRIPE SECRET_KEY is not configured. Expected settings.PAYMENTS['STRIPE']['SECRET_KEY']."
        )
    return sk


def _get_webhook_secret() -> str:
    secret = (_stripe_cfg().get("WEBHOOK_SECRET") or "").strip()
    if not secret:
        raise PaymentConfigurationError("STRIPE WEBHOOK_SECRET is not configured.")
    return secret


def _currency() -> str:
    return (_stripe_cfg().get("CURRENCY") or "eur").lower()


def _plain(obj) -> dict[str, Any]:
    if obj is None:
        return {}
    if isinstance(obj, stripe.StripeObject):
        return obj.to_dict()
    return dict(obj)


def to_cents(amount) -> int:
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError) as exc:
        raise ValueError("amount must be a valid Decimal") from exc
    return int((value * Decimal("100")).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_cents(cents) -> Decimal:
    return (Decimal(int(cents or 0)) / Decimal("100")).quantize(Decimal("0.01"))


# ---------------- CHECKOUT ----------------
def build_line_items(items: list[dict]) -> list[dict]:
    """
    Cart items -> Stripe line items.
    Name is "{product} - {scent}"; product/scent ids ride along as metadata.
    """
    currency = _currency()
    line_items = []
    for item in items:
        scent = item.get("selectedScent") or {}
        line_items.append(
            {
                "price_data": {
                    "currency": currency,
                    "product_data": {
                        "name": f"{item['name']} - {scent.get('name', '')}",
                        "metadata": {
                            "productId": str(item["id"]),
                            "scentId": str(scent.get("id", "")),
                        },
                    },
                    "unit_amount": to_cents(item["price"]),
                },
                "quantity": int(item["quantity"]),
            }
        )
    return line_items


def create_checkout_session(
    *,
    items: list[dict],
    order_id: str,
    user_id: str,
    customer_email: str = "",
) -> dict[str, Any]:
    app_url = settings.APP_URL.rstrip("/")
    params: dict[str, Any] = {
        "mode": "payment",
        "payment_method_types": ["card"],
        "line_items": build_line_items(items),
        "success_url": f"{app_url}/success?session_id={{CHECKOUT_SESSION_ID}}",
        "cancel_url": f"{app_url}/cart",
        "shipping_address_collection": {
            "allowed_countries": list(_stripe_cfg().get("SHIPPING_COUNTRIES") or ["FR"]),
        },
        "shipping_options": [
            {
                "shipping_rate_data": {
                    "type": "fixed_amount",
                    "fixed_amount": {"amount": 0, "currency": _currency()},
                    "display_name": FREE_SHIPPING_LABEL,
                }
            }
        ],
        "metadata": {"orderId": str(order_id), "userId": str(user_id)},
    }
    if customer_email:
        params["customer_email"] = customer_email

    try:
        session = stripe.checkout.Session.create(api_key=_get_secret_key(), **params)
    except stripe.StripeError as e:
        raise PaymentGatewayError(f"Stripe session creation failed: {e}") from e

    return _plain(session)


def retrieve_checkout_session(session_id: str) -> dict[str, Any]:
    try:
        session = stripe.checkout.Session.retrieve(
            session_id,
            api_key=_get_secret_key(),
        )
    except stripe.StripeError as e:
        raise PaymentGatewayError(f"Stripe session retrieval failed: {e}") from e
    return _plain(session)


# ---------------- REFUNDS ----------------
def create_refund(
    *,
    payment_intent: str,
    amount=None,
    metadata: dict | None = None,
) -> dict[str, Any]:
    """
    Refund a payment intent. `amount` is in euros (None = full refund).
    """
    params: dict[str, Any] = {"payment_intent": payment_intent}
    if amount is not None:
        params["amount"] = to_cents(amount)
    if metadata:
        params["metadata"] = {k: str(v) for k, v in metadata.items()}

    try:
        refund = stripe.Refund.create(api_key=_get_secret_key(), **params)
    except stripe.StripeError as e:
        raise PaymentGatewayError(f"Stripe refund failed: {e}") from e

    return _plain(refund)


# ---------------- WEBHOOKS ----------------
def construct_webhook_event(*, payload: bytes, signature: str | None) -> dict[str, Any]:
    if not signature:
        raise WebhookSignatureError("Missing Stripe-Signature header")

    try:
        event = stripe.Webhook.construct_event(payload, signature, _get_webhook_secret())
    except stripe.SignatureVerificationError as e:
        raise WebhookSignatureError("Invalid signature") from e
    except ValueError as e:
        raise WebhookSignatureError("Invalid payload") from e

    return _plain(event)
