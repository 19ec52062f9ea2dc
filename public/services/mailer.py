# public/services/mailer.py

"""
TRANSACTIONAL EMAIL (Resend)

Bodies come from Django templates under templates/emails/ (HTML + text pair).
Every send raises on failure; callers decide whether the failure is fatal:
- order confirmation / newsletter welcome: logged, never rolls back the mutation
- contact form: surfaced as a 500
"""

from __future__ import annotations

import logging
from typing import Any

import resend
from django.conf import settings
from django.template.loader import render_to_string

logger = logging.getLogger(__name__)

ORDER_CONFIRMATION_SUBJECT = "Confirmation de votre commande UnikCandle"
NEWSLETTER_WELCOME_SUBJECT = "Bienvenue dans l'aventure UNIKCANDLE !"
CONTACT_CONFIRMATION_SUBJECT = "Confirmation de votre message - UnikCandle"


class EmailConfigurationError(RuntimeError):
    pass


class EmailDeliveryError(RuntimeError):
    pass


def _render(template: str, context: dict) -> tuple[str, str]:
    html = render_to_string(f"emails/{template}.html", context)
    text = render_to_string(f"emails/{template}.txt", context)
    return html, text


def send_email(
    *,
    to: list[str] | str,
    subject: str,
    template: str,
    context: dict,
    reply_to: str | None = None,
) -> str:
    """
    Render `template` and hand it to Resend. Returns the Resend message id.
    """
    api_key = (getattr(settings, "RESEND_API_KEY", "") or "").strip()
    if not api_key:
        raise EmailConfigurationError("RESEND_API_KEY is not configured.")

    html, text = _render(template, context)
    payload: dict[str, Any] = {
        "from": settings.EMAIL_FROM,
        "to": [to] if isinstance(to, str) else list(to),
        "subject": subject,
        "html": html,
        "text": text,
    }
    if reply_to:
        payload["reply_to"] = reply_to

    resend.api_key = api_key
    try:
        response = resend.Emails.send(payload)
    except Exception as exc:
        raise EmailDeliveryError(f"Resend send failed: {exc}") from exc

    message_id = response.get("id") if isinstance(response, dict) else None
    if not message_id:
        raise EmailDeliveryError(f"Unexpected Resend response: {response!r}")

    logger.info("Email sent", extra={"template": template, "message_id": message_id})
    return message_id


# ---------------- MESSAGES ----------------
def send_order_confirmation(order) -> str:
    user = order.user
    if user is None or not user.email:
        raise EmailDeliveryError("Order has no customer email")

    items = list(order.items.select_related("product", "scent"))
    address = getattr(order, "shipping_address", None)

    return send_email(
        to=user.email,
        subject=ORDER_CONFIRMATION_SUBJECT,
        template="order_confirmation",
        context={
            "order": order,
            "order_ref": str(order.id)[:8].upper(),
            "user_name": user.name,
            "items": items,
            "address": address,
            "app_url": settings.APP_URL,
        },
    )


def send_newsletter_welcome(email: str) -> str:
    return send_email(
        to=email,
        subject=NEWSLETTER_WELCOME_SUBJECT,
        template="newsletter_welcome",
        context={"app_url": settings.APP_URL},
    )


def send_contact_messages(data: dict) -> None:
    """
    Team notification (reply_to = customer), then the customer's confirmation.
    """
    send_email(
        to=settings.CONTACT_EMAIL,
        subject=f"Nouveau message de contact: {data['subject']}",
        template="contact_form",
        context={**data, "is_confirmation": False},
        reply_to=data["email"],
    )
    send_email(
        to=data["email"],
        subject=CONTACT_CONFIRMATION_SUBJECT,
        template="contact_form",
        context={**data, "is_confirmation": True},
    )
