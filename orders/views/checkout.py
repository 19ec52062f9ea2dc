# orders/views/checkout.py

"""
STRIPE CHECKOUT ENDPOINTS

- POST /api/checkout/session/               create a Checkout Session (authenticated)
- POST /api/checkout/webhook/               Stripe events (signature verified)
- POST /api/checkout/confirm/               success-page finalize {session_id}
- GET  /api/checkout/session/{session_id}/  {processed, status}

The webhook and the confirm flow share orders.services.checkout.finalize_session,
which is idempotent: whichever runs first creates the order.
"""

from __future__ import annotations

import logging

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle, UserRateThrottle
from rest_framework.views import APIView

from backend.exceptions import GENERIC_ERROR_MESSAGE, error_response
from orders.serializers import OrderSerializer
from orders.services.checkout import (
    CheckoutError,
    finalize_session,
    session_status,
    start_checkout,
)
from orders.services.orders import order_queryset
from permissions.roles import IsNotBanned
from public.serializers import CheckoutConfirmSerializer, CheckoutSessionSerializer
from public.services import stripe_gateway
from public.services.stripe_gateway import (
    PaymentConfigurationError,
    PaymentGatewayError,
    WebhookSignatureError,
)

logger = logging.getLogger(__name__)

SESSION_COMPLETED_EVENT = "checkout.session.completed"


class CheckoutThrottle(UserRateThrottle):
    scope = "public_write"


class WebhookThrottle(AnonRateThrottle):
    scope = "webhook"


# ---------------- CREATE SESSION ----------------
class CheckoutSessionView(APIView):
    permission_classes = [IsAuthenticated, IsNotBanned]
    throttle_classes = [CheckoutThrottle]

    @extend_schema(
        request=CheckoutSessionSerializer,
        responses={
            200: OpenApiResponse(description="{sessionId, url}"),
            400: OpenApiResponse(description="Validation error"),
            500: OpenApiResponse(description="Payment provider error"),
        },
        tags=["Checkout"],
    )
    def post(self, request):
        serializer = CheckoutSessionSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            result = start_checkout(user=request.user, items=serializer.validated_data["items"])
        except (PaymentGatewayError, PaymentConfigurationError):
            logger.exception("Checkout session creation failed", extra={"user_id": str(request.user.id)})
            return error_response(
                GENERIC_ERROR_MESSAGE,
                http_status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )

        return Response(result, status=status.HTTP_200_OK)


# ---------------- WEBHOOK ----------------
class StripeWebhookView(APIView):
    permission_classes = [AllowAny]
    authentication_classes = []
    throttle_classes = [WebhookThrottle]

    @extend_schema(request=None, responses={200: OpenApiResponse(description="Acknowledged")}, tags=["Checkout"])
    def post(self, request):
        payload = request.body
        signature = request.headers.get("Stripe-Signature")

        try:
            event = stripe_gateway.construct_webhook_event(payload=payload, signature=signature)
        except WebhookSignatureError as exc:
            logger.warning("Stripe webhook rejected", extra={"reason": str(exc)})
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)
        except PaymentConfigurationError:
            logger.exception("Stripe webhook secret missing")
            return error_response("Webhook not configured", http_status=status.HTTP_400_BAD_REQUEST)

        event_type = event.get("type")
        logger.info("Stripe webhook received", extra={"event_type": event_type, "event_id": event.get("id")})

        if event_type != SESSION_COMPLETED_EVENT:
            return Response({"received": True})

        session = (event.get("data") or {}).get("object") or {}
        try:
            order, created = finalize_session(session)
        except CheckoutError as exc:
            logger.warning(
                "Checkout finalize failed",
                extra={"session_id": session.get("id"), "reason": str(exc)},
            )
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        return Response({"received": True, "order_id": str(order.id), "created": created})


# ---------------- SUCCESS PAGE ----------------
class CheckoutConfirmView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(
        request=CheckoutConfirmSerializer,
        responses={200: OrderSerializer, 400: OpenApiResponse(description="Session not finalizable")},
        tags=["Checkout"],
    )
    def post(self, request):
        serializer = CheckoutConfirmSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            session = stripe_gateway.retrieve_checkout_session(serializer.validated_data["session_id"])
        except (PaymentGatewayError, PaymentConfigurationError):
            logger.exception("Checkout session lookup failed")
            return error_response("Payment session not found", http_status=status.HTTP_400_BAD_REQUEST)

        user_id = (session.get("metadata") or {}).get("userId")
        if user_id and user_id != str(request.user.id):
            return error_response("This session belongs to another account", http_status=status.HTTP_403_FORBIDDEN)

        try:
            order, created = finalize_session(session)
        except CheckoutError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        order = order_queryset().get(pk=order.pk)
        return Response(
            {"success": True, "created": created, "order": OrderSerializer(order, context={"request": request}).data}
        )


class CheckoutSessionStatusView(APIView):
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: OpenApiResponse(description="{processed, status}")}, tags=["Checkout"])
    def get(self, request, session_id: str):
        try:
            result = session_status(session_id)
        except (PaymentGatewayError, PaymentConfigurationError):
            logger.exception("Checkout session status lookup failed", extra={"session_id": session_id})
            return error_response("Payment session not found", http_status=status.HTTP_404_NOT_FOUND)
        return Response(result)
