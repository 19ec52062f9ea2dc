# products/views/catalog.py

"""
STOREFRONT CATALOG (read only, AllowAny)

- GET /api/products/                  list (filters, ordering, windowed pagination)
- GET /api/products/{id}/             detail with reviews
- POST /api/products/{id}/reviews/    authenticated buyers only
- GET /api/categories/ , /api/categories/{id}/
- GET /api/scents/ , /api/scents/{id}/

Soft-deleted rows never show up here. Text fields follow ?locale= / Accept-Language.
"""

import logging

from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.throttling import AnonRateThrottle

from backend.exceptions import error_response
from permissions.roles import IsNotBanned
from products.filters import ProductFilter
from products.models import Category, Product, Scent
from products.serializers import (
    CategorySerializer,
    ProductDetailSerializer,
    ProductSerializer,
    ReviewSerializer,
    ReviewWriteSerializer,
    ScentSerializer,
    with_rating,
)
from products.services.i18n import resolve_locale
from products.services.reviews import (
    DuplicateReviewError,
    ReviewNotAllowedError,
    create_review,
)

logger = logging.getLogger(__name__)


class CatalogAnonThrottle(AnonRateThrottle):
    scope = "public_catalog"


class LocaleContextMixin:
    def get_serializer_context(self):
        context = super().get_serializer_context()
        context["locale"] = resolve_locale(self.request)
        return context


LOCALE_PARAM = OpenApiParameter("locale", str, OpenApiParameter.QUERY, required=False, enum=["fr", "en"])


@extend_schema(tags=["Catalog"], parameters=[LOCALE_PARAM])
class ProductViewSet(LocaleContextMixin, viewsets.ReadOnlyModelViewSet):
    permission_classes = [AllowAny]
    throttle_classes = [CatalogAnonThrottle]
    filterset_class = ProductFilter

    def get_queryset(self):
        qs = (
            Product.objects.alive()
            .filter(category__deleted_at__isnull=True)
            .select_related("category", "scent")
            .prefetch_related("images")
        )
        if self.action == "retrieve":
            qs = qs.prefetch_related("reviews__user")
        return with_rating(qs).order_by("-created_at")

    def get_serializer_class(self):
        if self.action == "retrieve":
            return ProductDetailSerializer
        if self.action == "reviews":
            return ReviewWriteSerializer
        return ProductSerializer

    @extend_schema(
        request=ReviewWriteSerializer,
        responses={
            201: ReviewSerializer,
            400: OpenApiResponse(description="Validation error or duplicate review"),
            403: OpenApiResponse(description="No delivered order contains this product"),
        },
    )
    @action(
        detail=True,
        methods=["post"],
        url_path="reviews",
        permission_classes=[IsAuthenticated, IsNotBanned],
        throttle_classes=[],
    )
    def reviews(self, request, pk=None):
        product = self.get_object()

        serializer = ReviewWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        try:
            review = create_review(
                user=request.user,
                product=product,
                rating=serializer.validated_data["rating"],
                comment=serializer.validated_data["comment"],
            )
        except DuplicateReviewError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)
        except ReviewNotAllowedError as exc:
            return error_response(str(exc), http_status=status.HTTP_403_FORBIDDEN)

        return Response(ReviewSerializer(review).data, status=status.HTTP_201_CREATED)


@extend_schema(tags=["Catalog"], parameters=[LOCALE_PARAM])
class CategoryViewSet(LocaleContextMixin, viewsets.ReadOnlyModelViewSet):
    permission_classes = [AllowAny]
    throttle_classes = [CatalogAnonThrottle]
    serializer_class = CategorySerializer
    pagination_class = None
    queryset = Category.objects.alive().order_by("name")


@extend_schema(tags=["Catalog"], parameters=[LOCALE_PARAM])
class ScentViewSet(LocaleContextMixin, viewsets.ReadOnlyModelViewSet):
    permission_classes = [AllowAny]
    throttle_classes = [CatalogAnonThrottle]
    serializer_class = ScentSerializer
    pagination_class = None
    queryset = Scent.objects.all().order_by("name")
