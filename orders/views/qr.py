# orders/views/qr.py

"""
QR FLOW

- POST /api/qr/          {order_item_id} -> {code, url, qr_code}  (authenticated, item owner)
- GET  /api/qr/?code=    AR page payload                          (AllowAny)
"""

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle
from rest_framework.views import APIView

from backend.exceptions import error_response
from orders.models import OrderItem, QRCode
from orders.serializers import QRCodeCreateSerializer, QRCodeResponseSerializer
from orders.services.qr import (
    generate_secure_qr_code,
    is_valid_qr_code,
    qr_data_url,
    qr_target_url,
)
from products.serializers import ProductSerializer, ScentSerializer
from products.services.i18n import resolve_locale

logger = logging.getLogger(__name__)


class ARPageThrottle(AnonRateThrottle):
    scope = "public_catalog"


class QRCodeView(APIView):
    def get_permissions(self):
        if self.request.method == "GET":
            return [AllowAny()]
        return [IsAuthenticated()]

    def get_throttles(self):
        if self.request.method == "GET":
            return [ARPageThrottle()]
        return super().get_throttles()

    @extend_schema(
        request=QRCodeCreateSerializer,
        responses={200: QRCodeResponseSerializer, 404: OpenApiResponse(description="Unknown order item")},
        tags=["QR"],
    )
    def post(self, request):
        serializer = QRCodeCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        item = (
            OrderItem.objects.filter(
                pk=serializer.validated_data["order_item_id"],
                order__user=request.user,
            )
            .select_related("qr_code")
            .first()
        )
        if item is None:
            return error_response("Order item not found", http_status=status.HTTP_404_NOT_FOUND)

        qr, created = QRCode.objects.get_or_create(
            order_item=item,
            defaults={"code": generate_secure_qr_code()},
        )
        if created:
            logger.info("QR code created", extra={"order_item_id": str(item.id)})

        url = qr_target_url(qr.code)
        return Response({"code": qr.code, "url": url, "qr_code": qr_data_url(url)})

    @extend_schema(
        parameters=[OpenApiParameter("code", str, OpenApiParameter.QUERY, required=True)],
        responses={
            200: OpenApiResponse(description="AR page payload"),
            400: OpenApiResponse(description="Missing or malformed code"),
            404: OpenApiResponse(description="Unknown code"),
        },
        tags=["QR"],
    )
    def get(self, request):
        code = (request.query_params.get("code") or "").strip()
        if not code:
            return error_response("QR code is required", http_status=status.HTTP_400_BAD_REQUEST)
        if not is_valid_qr_code(code):
            return error_response("Invalid QR code format", http_status=status.HTTP_400_BAD_REQUEST)

        qr = (
            QRCode.objects.select_related(
                "order_item__product__category",
                "order_item__product__scent",
                "order_item__scent",
            )
            .prefetch_related("order_item__product__images")
            .filter(code__iexact=code)
            .first()
        )
        if qr is None:
            return error_response("QR code not found", http_status=status.HTTP_404_NOT_FOUND)

        item = qr.order_item
        product = item.product
        context = {"request": request, "locale": resolve_locale(request)}
        scent = item.scent or product.scent

        return Response(
            {
                "code": qr.code,
                "product": ProductSerializer(product, context=context).data,
                "audio_url": item.audio_url or None,
                "text_message": item.text_message or None,
                "animation_id": item.animation_id or product.ar_animation,
                "message_type": product.message_type,
                "scent": ScentSerializer(scent, context=context).data if scent else None,
            }
        )
