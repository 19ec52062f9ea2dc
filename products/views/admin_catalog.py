# products/views/admin_catalog.py

"""
CATALOG BACK-OFFICE (admin only), mounted at /api/admin/

Products:
- GET/POST          /products/
- GET/PATCH/DELETE  /products/{id}/      (PATCH is partial; DELETE is soft)

Categories:
- GET/POST          /categories/
- GET/PATCH/DELETE  /categories/{id}/    (DELETE soft-deletes the category's products too)

Scents:
- GET/POST          /scents/
- GET/PATCH/DELETE  /scents/{id}/        (DELETE refused while products use the scent)
"""

import logging

from django.db.models import Count, Q
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from backend.exceptions import error_response
from permissions.roles import IsAdmin
from products.models import Category, Product, Scent
from products.serializers import (
    AdminCategorySerializer,
    AdminProductSerializer,
    AdminScentSerializer,
    ProductWriteSerializer,
    with_rating,
)
from products.services.catalog import (
    AlreadyDeletedError,
    ScentInUseError,
    create_product,
    delete_category,
    delete_product,
    delete_scent,
    update_product,
)

logger = logging.getLogger(__name__)


# ---------------- PRODUCTS ----------------
@extend_schema(tags=["Admin"])
class AdminProductViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = AdminProductSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_queryset(self):
        qs = (
            Product.objects.alive()
            .select_related("category", "scent")
            .prefetch_related("images")
        )
        search = (self.request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(name__icontains=search)
        return with_rating(qs).order_by("name")

    @extend_schema(request=ProductWriteSerializer, responses={201: AdminProductSerializer})
    def create(self, request):
        serializer = ProductWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        product = create_product(**serializer.validated_data)
        product = with_rating(Product.objects.filter(pk=product.pk)).get()
        return Response(AdminProductSerializer(product).data, status=status.HTTP_201_CREATED)

    @extend_schema(request=ProductWriteSerializer, responses={200: AdminProductSerializer})
    def partial_update(self, request, pk=None):
        product = self.get_object()

        serializer = ProductWriteSerializer(data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)

        update_product(product, **serializer.validated_data)
        product = with_rating(Product.objects.filter(pk=product.pk)).get()
        return Response(AdminProductSerializer(product).data)

    def destroy(self, request, pk=None):
        product = self.get_object()
        try:
            delete_product(product)
        except AlreadyDeletedError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True})


# ---------------- CATEGORIES ----------------
@extend_schema(tags=["Admin"])
class AdminCategoryViewSet(viewsets.ModelViewSet):
    serializer_class = AdminCategorySerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    pagination_class = None
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]

    def get_queryset(self):
        qs = Category.objects.annotate(
            live_product_count=Count("products", filter=Q(products__deleted_at__isnull=True))
        )
        # deleted categories stay addressable so a second delete reports 400
        if self.action != "destroy":
            qs = qs.alive()
        return qs.order_by("name")

    def destroy(self, request, pk=None):
        category = self.get_object()
        try:
            deleted_products_count = delete_category(category)
        except AlreadyDeletedError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)

        return Response({"success": True, "deleted_products_count": deleted_products_count})


# ---------------- SCENTS ----------------
@extend_schema(tags=["Admin"])
class AdminScentViewSet(viewsets.ModelViewSet):
    serializer_class = AdminScentSerializer
    permission_classes = [IsAuthenticated, IsAdmin]
    pagination_class = None
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    queryset = Scent.objects.all().order_by("name")

    def destroy(self, request, pk=None):
        scent = self.get_object()
        try:
            delete_scent(scent)
        except ScentInUseError as exc:
            return error_response(str(exc), http_status=status.HTTP_400_BAD_REQUEST)
        return Response({"success": True})
