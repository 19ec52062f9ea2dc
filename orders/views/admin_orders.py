# orders/views/admin_orders.py

"""
ORDERS BACK-OFFICE (admin only), mounted at /api/admin/

Orders:
- GET   /orders/                   ?page=&limit=&search=&status= -> {orders, pagination}
- POST  /orders/                   manual order
- GET   /orders/{id}/
- PATCH /orders/{id}/              {status}
- GET   /orders/qr-code/{code}/    PNG attachment

Returns:
- GET    /returns/                 ?status=
- PATCH  /returns/{id}/            status / notes / refund amount / instructions
- PATCH  /returns/{id}/tracking/
- POST   /returns/{id}/refund/     Stripe refund
- DELETE /returns/{id}/

Dashboard:
- GET /dashboard/
"""

import logging

from django.http import HttpResponse
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.exceptions import error_response
from orders.filters import ReturnFilter
from orders.models import QRCode
from orders.serializers import (
    AdminOrderSerializer,
    AdminReturnSerializer,
    ManualOrderSerializer,
    OrderStatusSerializer,
    ReturnRefundSerializer,
    ReturnTrackingSerializer,
    ReturnUpdateSerializer,
)
from orders.services.dashboard import dashboard_stats
from orders.services.orders import (
    UnknownCatalogItemError,
    UnknownUserError,
    admin_order_queryset,
    create_manual_order,
    order_queryset,
    set_status,
)
from orders.services.qr import qr_png_bytes, qr_target_url
from orders.services.returns import (
    RefundNotAllowedError,
    ReturnRefundFailedError,
    refund_return,
    return_queryset,
    update_return,
    update_tracking,
)
from permissions.roles import IsAdmin
from public.pagination import paginate_queryset, parse_limit, parse_page

logger = logging.getLogger(__name__)


# ---------------- ORDERS ----------------
@extend_schema(tags=["Admin"])
class AdminOrderViewSet(
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminOrderSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    http_method_names = ["get", "post", "patch", "head", "options"]

    def get_queryset(self):
        return order_queryset().order_by("-created_at")

    @extend_schema(
        parameters=[
            OpenApiParameter("page", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("limit", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("search", str, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("status", str, OpenApiParameter.QUERY, required=False),
        ],
        responses={200: OpenApiResponse(description="{orders, pagination}")},
    )
    def list(self, request):
        params = request.query_params
        qs = admin_order_queryset(
            search=params.get("search") or "",
            status=params.get("status") or "",
        )
        rows, meta = paginate_queryset(
            qs,
            page=parse_page(params.get("page")),
            limit=parse_limit(params.get("limit")),
        )
        return Response(
            {
                "orders": AdminOrderSerializer(rows, many=True, context=self.get_serializer_context()).data,
                "pagination": meta,
            }
        )

    @extend_schema(request=ManualOrderSerializer, responses={201: AdminOrderSerializer})
    def create(self, request):
        serializer = ManualOrderSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            order = create_manual_order(**serializer.validated_data)
        except UnknownUserError as exc:
            return error_response(str(exc), http_status=status.HTTP_404_NOT_FOUND)
        except UnknownCatalogItemError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        order = self.get_queryset().get(pk=order.pk)
        return Response(
            AdminOrderSerializer(order, context=self.get_serializer_context()).data,
            status=status.HTTP_201_CREATED,
        )

    @extend_schema(request=OrderStatusSerializer, responses={200: AdminOrderSerializer})
    def partial_update(self, request, pk=None):
        order = self.get_object()
        serializer = OrderStatusSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        set_status(order=order, status=serializer.validated_data["status"])
        order = self.get_queryset().get(pk=order.pk)
        return Response(AdminOrderSerializer(order, context=self.get_serializer_context()).data)


class AdminQRCodeImageView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(
        responses={(200, "image/png"): OpenApiResponse(description="QR code PNG"), 404: OpenApiResponse()},
        tags=["Admin"],
    )
    def get(self, request, code: str):
        qr = QRCode.objects.filter(code__iexact=code).first()
        if qr is None:
            return error_response("QR code not found", http_status=status.HTTP_404_NOT_FOUND)

        response = HttpResponse(qr_png_bytes(qr_target_url(qr.code)), content_type="image/png")
        response["Content-Disposition"] = f'attachment; filename="qr-code-{qr.code}.png"'
        return response


# ---------------- RETURNS ----------------
@extend_schema(tags=["Admin"])
class AdminReturnViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminReturnSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    filterset_class = ReturnFilter
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_queryset(self):
        return return_queryset().order_by("-created_at")

    @extend_schema(request=ReturnUpdateSerializer, responses={200: AdminReturnSerializer})
    def partial_update(self, request, pk=None):
        ret = self.get_object()
        serializer = ReturnUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ret = update_return(ret, **serializer.validated_data)
        return Response(AdminReturnSerializer(ret).data)

    @extend_schema(request=ReturnTrackingSerializer, responses={200: AdminReturnSerializer})
    @action(detail=True, methods=["patch"], url_path="tracking")
    def tracking(self, request, pk=None):
        ret = self.get_object()
        serializer = ReturnTrackingSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        ret = update_tracking(ret, **serializer.validated_data)
        return Response(AdminReturnSerializer(ret).data)

    @extend_schema(
        request=ReturnRefundSerializer,
        responses={
            200: AdminReturnSerializer,
            400: OpenApiResponse(description="Return not refundable"),
            502: OpenApiResponse(description="Stripe refund failed"),
        },
    )
    @action(detail=True, methods=["post"], url_path="refund")
    def refund(self, request, pk=None):
        ret = self.get_object()
        serializer = ReturnRefundSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            ret, refund = refund_return(ret, amount=serializer.validated_data.get("refund_amount"))
        except RefundNotAllowedError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)
        except ReturnRefundFailedError:
            return error_response("Refund failed", http_status=status.HTTP_502_BAD_GATEWAY)

        return Response(
            {
                "success": True,
                "refund_id": refund.get("id"),
                "return": AdminReturnSerializer(ret).data,
            }
        )

    def destroy(self, request, *args, **kwargs):
        ret = self.get_object()
        logger.info("Return deleted", extra={"return_id": str(ret.id), "admin_id": str(request.user.id)})
        ret.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)


# ---------------- DASHBOARD ----------------
class AdminDashboardView(APIView):
    permission_classes = [IsAuthenticated, IsAdmin]

    @extend_schema(responses={200: OpenApiResponse(description="Dashboard aggregates")}, tags=["Admin"])
    def get(self, request):
        return Response(dashboard_stats())
