# orders/tests/test_checkout.py

import hashlib
import hmac
import json
import time
import uuid
from decimal import Decimal
from unittest import mock

from django.db import connection
from django.test import TestCase, override_settings
from django.urls import reverse
from rest_framework import status

from backend.testing import auth_client, make_catalog, make_user
from orders.models import Order, TemporaryOrder
from orders.services import checkout
from public.services import mailer, stripe_gateway

WEBHOOK_SECRET = "whsec_test_secret"


def _session(temp: TemporaryOrder, **overrides) -> dict:
    session = {
        "id": "cs_test_123",
        "status": "complete",
        "payment_status": "paid",
        "amount_total": 9998,
        "payment_intent": "pi_test_123",
        "metadata": {"orderId": str(temp.order_id), "userId": str(temp.user_id)},
        "collected_information": {
            "shipping_details": {
                "name": "Camille Martin",
                "address": {
                    "line1": "12 rue des Lilas",
                    "city": "Lyon",
                    "state": "",
                    "postal_code": "69001",
                    "country": "FR",
                },
            }
        },
    }
    session.update(overrides)
    return session


class CheckoutSessionTests(TestCase):
    def setUp(self):
        _, self.scent, self.product = make_catalog()
        self.user = make_user("buyer@example.com")
        self.client = auth_client(self.user)
        self.url = reverse("orders:checkout-session")
        self.item = {
            "id": str(self.product.id),
            "name": self.product.name,
            "price": 49.99,
            "quantity": 2,
            "selectedScent": {"id": str(self.scent.id), "name": self.scent.name},
            "textMessage": "Bon anniversaire",
        }

    def test_anonymous_is_rejected(self):
        res = auth_client().post(self.url, {"items": [self.item]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_empty_cart_is_a_validation_error(self):
        res = self.client.post(self.url, {"items": []}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("items", res.data["field_errors"])

    def test_invalid_item_is_a_validation_error(self):
        bad = {**self.item, "quantity": 0, "price": -1}
        res = self.client.post(self.url, {"items": [bad]}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(res.data["error"], "Invalid data")

        errors = res.data["field_errors"]["items"]["0"]
        self.assertEqual(set(errors), {"quantity", "price"})
        for messages in errors.values():
            self.assertTrue(messages)
            self.assertTrue(all(type(m) is str for m in messages))
            self.assertNotIn("ErrorDetail", "".join(messages))

    def test_only_invalid_items_are_reported(self):
        bad = {**self.item, "quantity": 0}
        res = self.client.post(self.url, {"items": [self.item, bad]}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(list(res.data["field_errors"]["items"]), ["1"])
        self.assertIn("quantity", res.data["field_errors"]["items"]["1"])

    @mock.patch.object(stripe_gateway, "create_checkout_session")
    def test_creates_session_and_temporary_order(self, create_session):
        create_session.return_value = {"id": "cs_test_1", "url": "https://checkout.stripe.com/c/cs_test_1"}

        res = self.client.post(self.url, {"items": [self.item]}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"sessionId": "cs_test_1", "url": "https://checkout.stripe.com/c/cs_test_1"})

        temp = TemporaryOrder.objects.get()
        self.assertEqual(temp.user, self.user)
        row = temp.order_data["items"][0]
        self.assertEqual(row["id"], str(self.product.id))
        self.assertEqual(row["quantity"], 2)
        self.assertEqual(row["textMessage"], "Bon anniversaire")
        self.assertEqual(row["audioUrl"], "")
        self.assertRegex(row["qrCode"], r"^[0-9a-f]{24}$")

        kwargs = create_session.call_args.kwargs
        self.assertEqual(kwargs["order_id"], str(temp.order_id))
        self.assertEqual(kwargs["user_id"], str(self.user.id))
        self.assertEqual(kwargs["customer_email"], "buyer@example.com")

    @mock.patch.object(stripe_gateway, "create_checkout_session")
    def test_stripe_failure_is_a_generic_500(self, create_session):
        create_session.side_effect = stripe_gateway.PaymentGatewayError("card_declined: secret detail")

        with self.assertLogs("orders.views.checkout", level="ERROR"):
            res = self.client.post(self.url, {"items": [self.item]}, format="json")

        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data, {"success": False, "error": "Internal server error"})
        self.assertFalse(TemporaryOrder.objects.exists())

    @mock.patch.object(stripe_gateway, "create_checkout_session")
    def test_stripe_is_called_outside_a_transaction(self, create_session):
        depth = len(connection.savepoint_ids)
        seen = {}

        def create(**kwargs):
            seen["depth"] = len(connection.savepoint_ids)
            seen["temp"] = TemporaryOrder.objects.filter(order_id=kwargs["order_id"]).exists()
            return {"id": "cs_test_1", "url": "https://checkout.stripe.com/c/cs_test_1"}

        create_session.side_effect = create
        res = self.client.post(self.url, {"items": [self.item]}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(seen, {"depth": depth, "temp": True})

    @mock.patch.object(stripe_gateway, "create_checkout_session")
    def test_missing_stripe_config_removes_temporary_order(self, create_session):
        create_session.side_effect = stripe_gateway.PaymentConfigurationError("STRIPE_SECRET_KEY missing")

        with self.assertLogs("orders.views.checkout", level="ERROR"):
            res = self.client.post(self.url, {"items": [self.item]}, format="json")

        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertFalse(TemporaryOrder.objects.exists())


class LineItemTests(TestCase):
    @override_settings(PAYMENTS={"STRIPE": {"CURRENCY": "eur"}})
    def test_line_items_carry_name_scent_and_cents(self):
        items = [
            {
                "id": "p1",
                "name": "Bougie Luxe",
                "price": 69.99,
                "quantity": 3,
                "selectedScent": {"id": "s1", "name": "Lavande"},
            }
        ]

        (line,) = stripe_gateway.build_line_items(items)

        self.assertEqual(line["quantity"], 3)
        self.assertEqual(line["price_data"]["currency"], "eur")
        self.assertEqual(line["price_data"]["unit_amount"], 6999)
        self.assertEqual(line["price_data"]["product_data"]["name"], "Bougie Luxe - Lavande")
        self.assertEqual(
            line["price_data"]["product_data"]["metadata"],
            {"productId": "p1", "scentId": "s1"},
        )

    def test_cents_round_half_up(self):
        self.assertEqual(stripe_gateway.to_cents("10.005"), 1001)
        self.assertEqual(stripe_gateway.from_cents(4999), Decimal("49.99"))


@mock.patch.object(mailer, "send_order_confirmation")
class FinalizeSessionTests(TestCase):
    """
    GUARANTEES:
    - one order per checkout, whichever of webhook / confirm runs first
    - the order id is the metadata orderId
    - an email failure never rolls the order back
    """

    def setUp(self):
        _, self.scent, self.product = make_catalog()
        self.user = make_user()
        self.temp = TemporaryOrder.objects.create(
            order_id=uuid.uuid4(),
            user=self.user,
            order_data={
                "items": [
                    {
                        "id": str(self.product.id),
                        "name": self.product.name,
                        "price": "49.99",
                        "quantity": 2,
                        "scentId": str(self.scent.id),
                        "scentName": self.scent.name,
                        "audioUrl": "",
                        "textMessage": "Merci",
                        "animationId": "",
                        "qrCode": "a" * 24,
                    }
                ]
            },
        )

    def test_creates_order_items_qr_and_address(self, send_mail):
        order, created = checkout.finalize_session(_session(self.temp))

        self.assertTrue(created)
        self.assertEqual(order.id, self.temp.order_id)
        self.assertEqual(order.status, Order.STATUS_PROCESSING)
        self.assertEqual(order.total, Decimal("99.98"))
        self.assertEqual(order.stripe_session_id, "cs_test_123")
        self.assertEqual(order.stripe_payment_intent_id, "pi_test_123")

        item = order.items.get()
        self.assertEqual(item.quantity, 2)
        self.assertEqual(item.price, Decimal("49.99"))
        self.assertEqual(item.scent, self.scent)
        self.assertEqual(item.qr_code.code, "a" * 24)

        self.assertEqual(order.shipping_address.city, "Lyon")
        self.assertEqual(order.shipping_address.zip_code, "69001")
        self.assertFalse(TemporaryOrder.objects.exists())
        send_mail.assert_called_once()

    def test_is_idempotent(self, send_mail):
        session = _session(self.temp)

        first, created_first = checkout.finalize_session(session)
        second, created_second = checkout.finalize_session(session)

        self.assertTrue(created_first)
        self.assertFalse(created_second)
        self.assertEqual(first.pk, second.pk)
        self.assertEqual(Order.objects.count(), 1)
        send_mail.assert_called_once()

    def test_email_failure_keeps_the_order(self, send_mail):
        send_mail.side_effect = mailer.EmailDeliveryError("resend down")

        with self.assertLogs("orders.services.checkout", level="ERROR"):
            order, created = checkout.finalize_session(_session(self.temp))

        self.assertTrue(created)
        self.assertTrue(Order.objects.filter(pk=order.pk).exists())

    def test_address_falls_back_to_customer_details(self, send_mail):
        session = _session(
            self.temp,
            collected_information=None,
            customer_details={"address": {"line1": "3 quai Voltaire", "city": "Paris", "postal_code": "75007"}},
        )

        order, _ = checkout.finalize_session(session)

        self.assertEqual(order.shipping_address.street, "3 quai Voltaire")
        self.assertEqual(order.shipping_address.country, "FR")

    def test_expanded_payment_intent(self, send_mail):
        order, _ = checkout.finalize_session(_session(self.temp, payment_intent={"id": "pi_expanded"}))
        self.assertEqual(order.stripe_payment_intent_id, "pi_expanded")

    def test_missing_temporary_order(self, send_mail):
        session = _session(self.temp)
        session["metadata"]["orderId"] = str(uuid.uuid4())

        with self.assertRaises(checkout.TemporaryOrderMissingError):
            checkout.finalize_session(session)
        self.assertFalse(Order.objects.exists())

    def test_unpaid_session_is_refused(self, send_mail):
        with self.assertRaises(checkout.SessionNotPaidError):
            checkout.finalize_session(_session(self.temp, payment_status="unpaid"))
        self.assertTrue(TemporaryOrder.objects.exists())

    def test_unknown_product_is_refused(self, send_mail):
        self.temp.order_data["items"][0]["id"] = str(uuid.uuid4())
        self.temp.save()

        with self.assertRaises(checkout.CatalogMismatchError):
            checkout.finalize_session(_session(self.temp))
        self.assertFalse(Order.objects.exists())
        self.assertTrue(TemporaryOrder.objects.exists())


def _sign(payload: bytes, secret: str = WEBHOOK_SECRET) -> str:
    timestamp = int(time.time())
    signed = f"{timestamp}.{payload.decode('utf-8')}".encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


@override_settings(PAYMENTS={"STRIPE": {"SECRET_KEY": "sk_test_x", "WEBHOOK_SECRET": WEBHOOK_SECRET}})
@mock.patch.object(mailer, "send_order_confirmation")
class StripeWebhookTests(TestCase):
    def setUp(self):
        _, self.scent, self.product = make_catalog()
        self.user = make_user()
        self.temp = TemporaryOrder.objects.create(
            order_id=uuid.uuid4(),
            user=self.user,
            order_data={
                "items": [
                    {
                        "id": str(self.product.id),
                        "name": self.product.name,
                        "price": "49.99",
                        "quantity": 1,
                        "scentId": str(self.scent.id),
                        "qrCode": "b" * 24,
                    }
                ]
            },
        )
        self.url = reverse("orders:checkout-webhook")

    def _event(self, event_type: str, obj: dict) -> bytes:
        event = {
            "id": "evt_test_1",
            "object": "event",
            "type": event_type,
            "data": {"object": obj},
        }
        return json.dumps(event).encode("utf-8")

    def _post(self, payload: bytes, signature: str | None):
        headers = {"HTTP_STRIPE_SIGNATURE": signature} if signature else {}
        return auth_client().post(self.url, data=payload, content_type="application/json", **headers)

    def test_missing_signature(self, send_mail):
        payload = self._event("checkout.session.completed", _session(self.temp))
        res = self._post(payload, None)
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    def test_invalid_signature(self, send_mail):
        payload = self._event("checkout.session.completed", _session(self.temp))
        res = self._post(payload, _sign(payload, secret="whsec_wrong"))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Order.objects.exists())

    @override_settings(PAYMENTS={"STRIPE": {"SECRET_KEY": "sk_test_x", "WEBHOOK_SECRET": ""}})
    def test_missing_secret(self, send_mail):
        payload = self._event("checkout.session.completed", _session(self.temp))
        with self.assertLogs("orders.views.checkout", level="ERROR"):
            res = self._post(payload, _sign(payload))
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_completed_session_creates_the_order(self, send_mail):
        payload = self._event("checkout.session.completed", _session(self.temp, amount_total=4999))
        res = self._post(payload, _sign(payload))

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        order = Order.objects.get()
        self.assertEqual(order.id, self.temp.order_id)
        self.assertEqual(order.total, Decimal("49.99"))

        replay = self._post(payload, _sign(payload))
        self.assertEqual(replay.status_code, status.HTTP_200_OK)
        self.assertFalse(replay.data["created"])
        self.assertEqual(Order.objects.count(), 1)

    def test_other_events_are_acknowledged(self, send_mail):
        payload = self._event("payment_intent.created", {"id": "pi_1"})
        res = self._post(payload, _sign(payload))
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data, {"received": True})
        self.assertFalse(Order.objects.exists())


@mock.patch.object(mailer, "send_order_confirmation")
class ConfirmAndStatusTests(TestCase):
    def setUp(self):
        _, self.scent, self.product = make_catalog()
        self.user = make_user()
        self.client = auth_client(self.user)
        self.temp = TemporaryOrder.objects.create(
            order_id=uuid.uuid4(),
            user=self.user,
            order_data={
                "items": [
                    {
                        "id": str(self.product.id),
                        "name": self.product.name,
                        "price": "49.99",
                        "quantity": 1,
                        "scentId": str(self.scent.id),
                        "qrCode": "c" * 24,
                    }
                ]
            },
        )

    def test_confirm_finalizes_and_returns_order(self, send_mail):
        with mock.patch.object(stripe_gateway, "retrieve_checkout_session", return_value=_session(self.temp)):
            res = self.client.post(reverse("orders:checkout-confirm"), {"session_id": "cs_test_123"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertTrue(res.data["created"])
        self.assertEqual(res.data["order"]["id"], str(self.temp.order_id))
        self.assertEqual(res.data["order"]["items"][0]["qr_code"], "c" * 24)

    def test_confirm_refuses_someone_elses_session(self, send_mail):
        other = auth_client(make_user())
        with mock.patch.object(stripe_gateway, "retrieve_checkout_session", return_value=_session(self.temp)):
            res = other.post(reverse("orders:checkout-confirm"), {"session_id": "cs_test_123"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Order.objects.exists())

    def test_session_status_reports_processing(self, send_mail):
        url = reverse("orders:checkout-session-status", args=["cs_test_123"])

        with mock.patch.object(stripe_gateway, "retrieve_checkout_session", return_value=_session(self.temp)):
            before = self.client.get(url)
            checkout.finalize_session(_session(self.temp))
            after = self.client.get(url)

        self.assertEqual(before.data, {"processed": False, "status": "complete"})
        self.assertEqual(after.data, {"processed": True, "status": "complete"})
