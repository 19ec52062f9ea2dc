# orders/views/returns.py

"""
CUSTOMER RETURNS (authenticated)

- GET  /api/returns/      own returns, newest first (?order_item_id=)
- POST /api/returns/      {order_item_id, reason, description?}
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from backend.exceptions import error_response
from orders.filters import ReturnFilter
from orders.serializers import ReturnCreateSerializer, ReturnSerializer
from orders.services.returns import (
    ReturnNotAllowedError,
    ReturnNotFoundError,
    request_return,
    return_queryset,
)
from permissions.roles import IsNotBanned


@extend_schema(tags=["Returns"])
class ReturnViewSet(
    mixins.ListModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = ReturnSerializer
    permission_classes = [IsAuthenticated, IsNotBanned]
    filterset_class = ReturnFilter
    pagination_class = None

    def get_queryset(self):
        return return_queryset().filter(user=self.request.user).order_by("-created_at")

    @extend_schema(
        request=ReturnCreateSerializer,
        responses={
            201: ReturnSerializer,
            400: OpenApiResponse(description="Return not allowed"),
            404: OpenApiResponse(description="Order item not found"),
        },
    )
    def create(self, request):
        serializer = ReturnCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            ret = request_return(user=request.user, **serializer.validated_data)
        except ReturnNotFoundError as exc:
            return error_response(str(exc), http_status=status.HTTP_404_NOT_FOUND)
        except ReturnNotAllowedError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        ret = return_queryset().get(pk=ret.pk)
        return Response(ReturnSerializer(ret).data, status=status.HTTP_201_CREATED)
