"""
PATH: users/views/admin_users.py

ADMIN USER MANAGEMENT (back-office)

Endpoints (admin only), mounted at /api/admin/users/:
- GET    /                 list (newest first, ?page=&limit=&search=)
- POST   /                 create {name, email, password>=8, role}
- DELETE /{id}/            delete
- POST   /{id}/role/       {role}
- POST   /{id}/ban/        {reason>=5, expires_at?}
- POST   /{id}/unban/

Guard:
- an admin cannot ban, demote or delete their own account
"""

from __future__ import annotations

import logging

from django.contrib.auth import get_user_model
from django.db.models import Q
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from permissions.roles import IsAdmin, ROLE_ADMIN
from users.serializers import (
    AdminUserCreateSerializer,
    BanUserSerializer,
    SetRoleSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)

User = get_user_model()


class AdminUserViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.DestroyModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = UserSerializer
    permission_classes = [IsAuthenticated, IsAdmin]

    def get_queryset(self):
        qs = User.objects.all().order_by("-created_at")

        search = (self.request.query_params.get("search") or "").strip()
        if search:
            qs = qs.filter(Q(name__icontains=search) | Q(email__icontains=search))

        return qs

    def _refuse_self(self, request, target, verb: str):
        if target.pk == request.user.pk:
            return Response(
                {"success": False, "error": f"You cannot {verb} your own account."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return None

    @extend_schema(
        parameters=[
            OpenApiParameter("page", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("limit", int, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("search", str, OpenApiParameter.QUERY, required=False),
        ],
        tags=["Admin"],
    )
    def list(self, request, *args, **kwargs):
        return super().list(request, *args, **kwargs)

    @extend_schema(request=AdminUserCreateSerializer, responses={201: UserSerializer}, tags=["Admin"])
    def create(self, request):
        serializer = AdminUserCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()

        logger.info(
            "Admin created user",
            extra={"admin_id": str(request.user.id), "user_id": str(user.id)},
        )
        return Response(UserSerializer(user).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, *args, **kwargs):
        target = self.get_object()
        refused = self._refuse_self(request, target, "delete")
        if refused:
            return refused

        logger.info(
            "Admin deleted user",
            extra={"admin_id": str(request.user.id), "user_id": str(target.id)},
        )
        target.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @extend_schema(request=SetRoleSerializer, responses={200: UserSerializer}, tags=["Admin"])
    @action(detail=True, methods=["post"], url_path="role")
    def role(self, request, pk=None):
        target = self.get_object()
        serializer = SetRoleSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        new_role = serializer.validated_data["role"]
        if new_role != ROLE_ADMIN:
            refused = self._refuse_self(request, target, "demote")
            if refused:
                return refused

        target.set_role(new_role)
        return Response(UserSerializer(target).data)

    @extend_schema(request=BanUserSerializer, responses={200: UserSerializer}, tags=["Admin"])
    @action(detail=True, methods=["post"], url_path="ban")
    def ban(self, request, pk=None):
        target = self.get_object()
        refused = self._refuse_self(request, target, "ban")
        if refused:
            return refused

        serializer = BanUserSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        target.ban(
            reason=serializer.validated_data["reason"],
            expires=serializer.validated_data.get("expires_at"),
        )

        logger.info(
            "Admin banned user",
            extra={"admin_id": str(request.user.id), "user_id": str(target.id)},
        )
        return Response(UserSerializer(target).data)

    @extend_schema(request=None, responses={200: UserSerializer}, tags=["Admin"])
    @action(detail=True, methods=["post"], url_path="unban")
    def unban(self, request, pk=None):
        target = self.get_object()
        target.unban()
        return Response(UserSerializer(target).data)
