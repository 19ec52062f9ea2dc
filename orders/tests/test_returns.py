# orders/tests/test_returns.py

from datetime import timedelta
from decimal import Decimal
from unittest import mock

from django.test import TestCase
from django.urls import reverse
from django.utils import timezone
from rest_framework import status

from backend.testing import auth_client, make_admin, make_catalog, make_order, make_user
from orders.models import Order, Return
from public.services import stripe_gateway


class RequestReturnTests(TestCase):
    """
    GUARANTEES (in order):
    - the item must belong to the caller (404)
    - the order must be DELIVERED (400)
    - no other open return for the item (400)
    - within 30 days of the order's last update (400)
    """

    def setUp(self):
        _, _, self.product = make_catalog()
        self.user = make_user()
        self.client = auth_client(self.user)
        self.order = make_order(self.user, self.product, status=Order.STATUS_DELIVERED)
        self.item = self.order.items.get()
        self.url = reverse("orders:returns-list")
        self.payload = {"order_item_id": str(self.item.id), "reason": "Arrivée cassée", "description": "Le verre est fêlé"}

    def test_creates_requested_return(self):
        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(res.data["status"], Return.STATUS_REQUESTED)
        self.assertEqual(res.data["refund_status"], Return.REFUND_PENDING)
        self.assertEqual(res.data["order_item"]["id"], str(self.item.id))

        ret = Return.objects.get()
        self.assertEqual(ret.user, self.user)

    def test_someone_elses_item_is_not_found(self):
        res = auth_client(make_user()).post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_404_NOT_FOUND)
        self.assertFalse(Return.objects.exists())

    def test_order_must_be_delivered(self):
        Order.objects.filter(pk=self.order.pk).update(status=Order.STATUS_SHIPPED)

        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(Return.objects.exists())

    def test_open_return_blocks_a_second_one(self):
        first = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)

        second = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(second.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(Return.objects.count(), 1)

    def test_closed_return_allows_a_new_one(self):
        Return.objects.create(order_item=self.item, user=self.user, reason="Ancien retour", status=Return.STATUS_REJECTED)

        res = self.client.post(self.url, self.payload, format="json")
        self.assertEqual(res.status_code, status.HTTP_201_CREATED)

    def test_return_window_expired(self):
        Order.objects.filter(pk=self.order.pk).update(updated_at=timezone.now() - timedelta(days=31))

        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("30 days", res.data["error"])

    def test_reason_is_validated(self):
        res = self.client.post(self.url, {**self.payload, "reason": "bof"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("reason", res.data["field_errors"])

    def test_lists_own_returns(self):
        self.client.post(self.url, self.payload, format="json")
        other = make_user()
        other_order = make_order(other, self.product, status=Order.STATUS_DELIVERED)
        Return.objects.create(order_item=other_order.items.get(), user=other, reason="Pas le mien")

        res = self.client.get(self.url, {"order_item_id": str(self.item.id)})

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(len(res.data), 1)
        self.assertEqual(res.data[0]["order_item"]["id"], str(self.item.id))


class AdminReturnTests(TestCase):
    def setUp(self):
        _, _, self.product = make_catalog()
        self.customer = make_user()
        self.order = make_order(
            self.customer,
            self.product,
            status=Order.STATUS_DELIVERED,
            stripe_payment_intent_id="pi_456",
        )
        self.item = self.order.items.get()
        self.ret = Return.objects.create(order_item=self.item, user=self.customer, reason="Arrivée cassée")
        self.client = auth_client(make_admin())

    def _url(self, name, *args):
        return reverse(f"orders-admin:{name}", args=args)

    def test_customers_are_forbidden(self):
        res = auth_client(self.customer).get(self._url("returns-list"))
        self.assertEqual(res.status_code, status.HTTP_403_FORBIDDEN)

    def test_list_with_status_filter(self):
        res = self.client.get(self._url("returns-list"), {"status": Return.STATUS_REQUESTED})
        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["pagination"]["total"], 1)
        self.assertEqual(res.data["results"][0]["user_email"], self.customer.email)

        res = self.client.get(self._url("returns-list"), {"status": Return.STATUS_COMPLETED})
        self.assertEqual(res.data["pagination"]["total"], 0)

    def test_update_stamps_processed_at(self):
        res = self.client.patch(
            self._url("returns-detail", self.ret.id),
            {"status": Return.STATUS_APPROVED, "admin_note": "OK", "return_instructions": "Colissimo prépayé"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.ret.refresh_from_db()
        self.assertEqual(self.ret.status, Return.STATUS_APPROVED)
        self.assertEqual(self.ret.return_instructions, "Colissimo prépayé")
        self.assertIsNotNone(self.ret.processed_at)

    def test_update_rejects_unknown_status(self):
        res = self.client.patch(self._url("returns-detail", self.ret.id), {"status": "LOST"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("status", res.data["field_errors"])

    def test_tracking_number_marks_shipping_sent(self):
        res = self.client.patch(
            self._url("returns-tracking", self.ret.id),
            {"tracking_number": "6A123456789", "carrier": "Colissimo"},
            format="json",
        )

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.ret.refresh_from_db()
        self.assertEqual(self.ret.status, Return.STATUS_RETURN_SHIPPING_SENT)
        self.assertIsNotNone(self.ret.shipped_at)

    def test_tracking_delivered_stamps_delivered_at(self):
        self.client.patch(
            self._url("returns-tracking", self.ret.id),
            {"status": Return.STATUS_RETURN_DELIVERED},
            format="json",
        )

        self.ret.refresh_from_db()
        self.assertEqual(self.ret.status, Return.STATUS_RETURN_DELIVERED)
        self.assertIsNotNone(self.ret.delivered_at)
        self.assertIsNone(self.ret.shipped_at)

    def test_delete(self):
        res = self.client.delete(self._url("returns-detail", self.ret.id))
        self.assertEqual(res.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Return.objects.exists())

    def test_refund_requires_approved_return(self):
        res = self.client.post(self._url("returns-refund", self.ret.id), {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_refund_requires_payment_intent(self):
        Return.objects.filter(pk=self.ret.pk).update(status=Return.STATUS_APPROVED)
        Order.objects.filter(pk=self.order.pk).update(stripe_payment_intent_id="")

        res = self.client.post(self._url("returns-refund", self.ret.id), {}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    def test_refund_success(self):
        Return.objects.filter(pk=self.ret.pk).update(status=Return.STATUS_APPROVED)

        with mock.patch.object(stripe_gateway, "create_refund", return_value={"id": "re_789", "amount": 4999}) as create_refund:
            res = self.client.post(self._url("returns-refund", self.ret.id), {}, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(res.data["refund_id"], "re_789")

        kwargs = create_refund.call_args.kwargs
        self.assertEqual(kwargs["payment_intent"], "pi_456")
        self.assertEqual(kwargs["amount"], Decimal("49.99"))
        self.assertEqual(kwargs["metadata"]["returnId"], self.ret.id)
        self.assertEqual(kwargs["metadata"]["orderId"], self.order.id)

        self.ret.refresh_from_db()
        self.assertEqual(self.ret.status, Return.STATUS_COMPLETED)
        self.assertEqual(self.ret.refund_status, Return.REFUND_COMPLETED)
        self.assertEqual(self.ret.stripe_refund_id, "re_789")
        self.assertIsNotNone(self.ret.refunded_at)

    def test_refund_uses_admin_amount(self):
        Return.objects.filter(pk=self.ret.pk).update(status=Return.STATUS_APPROVED, refund_amount=Decimal("20.00"))

        with mock.patch.object(stripe_gateway, "create_refund", return_value={"id": "re_1", "amount": 2000}) as create_refund:
            self.client.post(self._url("returns-refund", self.ret.id), {}, format="json")

        self.assertEqual(create_refund.call_args.kwargs["amount"], Decimal("20.00"))

    def test_refund_failure_is_recorded(self):
        Return.objects.filter(pk=self.ret.pk).update(status=Return.STATUS_APPROVED)

        with mock.patch.object(
            stripe_gateway,
            "create_refund",
            side_effect=stripe_gateway.PaymentGatewayError("insufficient balance"),
        ):
            with self.assertLogs("orders.services.returns", level="ERROR"):
                res = self.client.post(self._url("returns-refund", self.ret.id), {}, format="json")

        self.assertEqual(res.status_code, status.HTTP_502_BAD_GATEWAY)
        self.assertEqual(res.data["error"], "Refund failed")

        self.ret.refresh_from_db()
        self.assertEqual(self.ret.refund_status, Return.REFUND_FAILED)
        self.assertIn("insufficient balance", self.ret.admin_note)
        self.assertEqual(self.ret.status, Return.STATUS_APPROVED)

        again = self.client.post(self._url("returns-refund", self.ret.id), {}, format="json")
        self.assertEqual(again.status_code, status.HTTP_400_BAD_REQUEST)
