# products/views/reviews.py

"""
REVIEW OWNERSHIP

- PATCH  /api/reviews/{id}/   owner only
- DELETE /api/reviews/{id}/   owner or admin
"""

import logging

from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import IsNotBanned, IsOwnerOrAdmin
from products.models import Review
from products.serializers import ReviewSerializer, ReviewUpdateSerializer

logger = logging.getLogger(__name__)


@extend_schema(tags=["Reviews"])
class ReviewViewSet(
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    queryset = Review.objects.select_related("user", "product")
    serializer_class = ReviewSerializer
    permission_classes = [IsAuthenticated, IsNotBanned, IsOwnerOrAdmin]
    owner_only_methods = {"PATCH"}
    http_method_names = ["get", "patch", "delete", "head", "options"]

    @extend_schema(request=ReviewUpdateSerializer, responses={200: ReviewSerializer})
    def partial_update(self, request, *args, **kwargs):
        review = self.get_object()

        serializer = ReviewUpdateSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        for field, value in serializer.validated_data.items():
            setattr(review, field, value)
        review.save()

        return Response(ReviewSerializer(review).data)

    def destroy(self, request, *args, **kwargs):
        review = self.get_object()
        logger.info(
            "Review deleted",
            extra={"review_id": str(review.id), "actor_id": str(request.user.id)},
        )
        review.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
