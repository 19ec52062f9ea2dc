"""
PATH: public/views/engagement.py

NEWSLETTER + CONTACT (AllowAny, public write throttle)

- POST /api/newsletter/   {email}; the welcome mail is best-effort
- POST /api/contact/      team mail + customer confirmation; a mail failure is a 500
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from backend.exceptions import error_response
from public.serializers import ContactSerializer, NewsletterSerializer
from public.services.mailer import (
    EmailConfigurationError,
    EmailDeliveryError,
    send_contact_messages,
    send_newsletter_welcome,
)

logger = logging.getLogger(__name__)


class PublicWriteThrottle(AnonRateThrottle):
    scope = "public_write"


class NewsletterView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        request=NewsletterSerializer,
        responses={201: NewsletterSerializer, 400: OpenApiResponse(description="Invalid or already subscribed")},
        tags=["Storefront"],
    )
    def post(self, request):
        serializer = NewsletterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        subscription = serializer.save()

        try:
            send_newsletter_welcome(subscription.email)
        except (EmailConfigurationError, EmailDeliveryError):
            logger.exception(
                "Newsletter welcome email failed",
                extra={"subscription_id": str(subscription.id)},
            )

        return Response(
            {"success": True, "message": "Subscribed to the newsletter"},
            status=status.HTTP_201_CREATED,
        )


class ContactView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [PublicWriteThrottle]

    @extend_schema(
        request=ContactSerializer,
        responses={
            200: OpenApiResponse(description="Message sent"),
            400: OpenApiResponse(description="Validation error"),
            500: OpenApiResponse(description="Email delivery failed"),
        },
        tags=["Storefront"],
    )
    def post(self, request):
        serializer = ContactSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            send_contact_messages(serializer.validated_data)
        except (EmailConfigurationError, EmailDeliveryError):
            logger.exception("Contact form email failed")
            return error_response(
                "Unable to send your message, please try again later",
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response({"success": True, "message": "Message sent"})
