# public/tests/test_mailer.py

from unittest import mock

from django.test import TestCase, override_settings

from backend.testing import make_catalog, make_order, make_user
from public.services import mailer

CONTACT = {
    "first_name": "Camille",
    "last_name": "Durand",
    "email": "camille@example.com",
    "phone": "",
    "subject": "Commande personnalisée",
    "message": "Bonjour, est-il possible de graver un prénom ?",
}


@override_settings(
    RESEND_API_KEY="re_test",
    EMAIL_FROM="UnikCandle <noreply@unikcandle.com>",
    CONTACT_EMAIL="team@unikcandle.com",
    APP_URL="https://unikcandle.com",
)
class MailerTests(TestCase):
    @mock.patch("resend.Emails.send", return_value={"id": "msg_1"})
    def test_send_email_payload(self, send):
        message_id = mailer.send_newsletter_welcome("reader@example.com")

        self.assertEqual(message_id, "msg_1")
        payload = send.call_args[0][0]
        self.assertEqual(payload["from"], "UnikCandle <noreply@unikcandle.com>")
        self.assertEqual(payload["to"], ["reader@example.com"])
        self.assertEqual(payload["subject"], mailer.NEWSLETTER_WELCOME_SUBJECT)
        self.assertIn("https://unikcandle.com", payload["html"])
        self.assertNotIn("reply_to", payload)

    @override_settings(RESEND_API_KEY="")
    def test_missing_api_key(self):
        with self.assertRaises(mailer.EmailConfigurationError):
            mailer.send_newsletter_welcome("reader@example.com")

    @mock.patch("resend.Emails.send", side_effect=RuntimeError("network down"))
    def test_vendor_error_is_wrapped(self, _send):
        with self.assertRaises(mailer.EmailDeliveryError):
            mailer.send_newsletter_welcome("reader@example.com")

    @mock.patch("resend.Emails.send", return_value={})
    def test_response_without_id(self, _send):
        with self.assertRaises(mailer.EmailDeliveryError):
            mailer.send_newsletter_welcome("reader@example.com")

    @mock.patch("resend.Emails.send", return_value={"id": "msg_2"})
    def test_contact_sends_team_mail_then_confirmation(self, send):
        mailer.send_contact_messages(CONTACT)

        self.assertEqual(send.call_count, 2)
        team, customer = (c[0][0] for c in send.call_args_list)
        self.assertEqual(team["to"], ["team@unikcandle.com"])
        self.assertEqual(team["reply_to"], "camille@example.com")
        self.assertIn("Commande personnalisée", team["subject"])
        self.assertEqual(customer["to"], ["camille@example.com"])
        self.assertEqual(customer["subject"], mailer.CONTACT_CONFIRMATION_SUBJECT)
        self.assertIn("Bonjour Camille", customer["text"])

    @mock.patch("resend.Emails.send", return_value={"id": "msg_3"})
    def test_order_confirmation(self, send):
        _, _, product = make_catalog()
        user = make_user("buyer@example.com", name="Léa")
        order = make_order(user, product, quantity=2)

        mailer.send_order_confirmation(order)

        payload = send.call_args[0][0]
        self.assertEqual(payload["to"], ["buyer@example.com"])
        self.assertIn(str(order.id)[:8].upper(), payload["text"])
        self.assertIn("Bougie Signature", payload["text"])
        self.assertIn("75002 Paris", payload["text"])
