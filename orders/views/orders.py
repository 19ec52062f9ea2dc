# orders/views/orders.py

"""
CUSTOMER ORDERS (authenticated)

- GET  /api/orders/                 own orders, newest first (?status=&start_date=&end_date=)
- GET  /api/orders/{id}/            owner only
- POST /api/orders/{id}/cancel/     owner only, PENDING / PROCESSING
- GET  /api/orders/{id}/invoice/    owner only, PDF attachment
"""

import logging

from django.http import HttpResponse
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from backend.exceptions import error_response
from orders.filters import OrderFilter
from orders.serializers import OrderSerializer
from orders.services.invoice import invoice_filename, render_invoice_pdf
from orders.services.orders import OrderNotCancellableError, cancel_order, order_queryset
from permissions.roles import IsOwnerOrAdmin

logger = logging.getLogger(__name__)


@extend_schema(tags=["Orders"])
class OrderViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = OrderSerializer
    permission_classes = [IsAuthenticated, IsOwnerOrAdmin]
    filterset_class = OrderFilter

    # customer routes: admins use /api/admin/orders/
    owner_only_methods = {"GET", "POST"}

    def get_queryset(self):
        qs = order_queryset().order_by("-created_at")
        if self.action == "list":
            qs = qs.filter(user=self.request.user)
        return qs

    @extend_schema(
        request=None,
        responses={
            200: OpenApiResponse(description="{success, order, refund_processed}"),
            400: OpenApiResponse(description="Order can no longer be cancelled"),
        },
    )
    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        order = self.get_object()

        try:
            order, refund_processed = cancel_order(order=order)
        except OrderNotCancellableError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        order = self.get_queryset().get(pk=order.pk)
        return Response(
            {
                "success": True,
                "order": OrderSerializer(order, context=self.get_serializer_context()).data,
                "refund_processed": refund_processed,
            }
        )

    @extend_schema(responses={(200, "application/pdf"): OpenApiResponse(description="Invoice PDF")})
    @action(detail=True, methods=["get"], url_path="invoice")
    def invoice(self, request, pk=None):
        order = self.get_object()

        response = HttpResponse(render_invoice_pdf(order), content_type="application/pdf")
        response["Content-Disposition"] = f'attachment; filename="{invoice_filename(order)}"'
        return response
