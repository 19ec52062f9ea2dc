# public/tests/test_engagement.py

from unittest import mock

from django.test import TestCase
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APIClient

from public.models import Newsletter
from public.services.mailer import EmailDeliveryError


class NewsletterTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.url = reverse("public:newsletter")

    @mock.patch("public.views.engagement.send_newsletter_welcome")
    def test_subscribe(self, send):
        res = self.client.post(self.url, {"email": "  Reader@Example.com "}, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertTrue(res.data["success"])
        self.assertTrue(Newsletter.objects.filter(email="reader@example.com").exists())
        send.assert_called_once_with("reader@example.com")

    @mock.patch("public.views.engagement.send_newsletter_welcome")
    def test_duplicate(self, send):
        Newsletter.objects.create(email="reader@example.com")

        res = self.client.post(self.url, {"email": "READER@example.com"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("email", res.data["field_errors"])
        send.assert_not_called()

    def test_invalid_email(self):
        res = self.client.post(self.url, {"email": "nope"}, format="json")
        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)

    @mock.patch("public.views.engagement.send_newsletter_welcome", side_effect=EmailDeliveryError("down"))
    def test_mail_failure_keeps_subscription(self, _send):
        with self.assertLogs("public.views.engagement", level="ERROR"):
            res = self.client.post(self.url, {"email": "reader@example.com"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_201_CREATED)
        self.assertEqual(Newsletter.objects.count(), 1)


class ContactTests(TestCase):
    payload = {
        "first_name": "Camille",
        "last_name": "Durand",
        "email": "camille@example.com",
        "subject": "Question cadeau",
        "message": "Peut-on ajouter un message vidéo ?",
    }

    def setUp(self):
        self.client = APIClient()
        self.url = reverse("public:contact")

    @mock.patch("public.views.engagement.send_contact_messages")
    def test_sends(self, send):
        res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_200_OK)
        self.assertEqual(send.call_args[0][0]["email"], "camille@example.com")

    def test_validation(self):
        res = self.client.post(self.url, {**self.payload, "subject": "Hi", "message": "short"}, format="json")

        self.assertEqual(res.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("subject", res.data["field_errors"])
        self.assertIn("message", res.data["field_errors"])

    @mock.patch("public.views.engagement.send_contact_messages", side_effect=EmailDeliveryError("down"))
    def test_mail_failure_is_500(self, _send):
        with self.assertLogs("public.views.engagement", level="ERROR"):
            res = self.client.post(self.url, self.payload, format="json")

        self.assertEqual(res.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(res.data["error"], "Unable to send your message, please try again later")
