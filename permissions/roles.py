# permissions/roles.py

from __future__ import annotations

from typing import Optional

from django.utils import timezone
from rest_framework.permissions import BasePermission


# =========================================================
# ROLE CONSTANTS
# =========================================================
# Two roles only: back-office admins and storefront customers.
ROLE_ADMIN = "admin"
ROLE_USER = "user"

ALL_ROLES = {
    ROLE_ADMIN,
    ROLE_USER,
}

ROLE_CHOICES = [
    (ROLE_ADMIN, "Admin"),
    (ROLE_USER, "User"),
]


# =========================================================
# Helpers
# =========================================================
def get_user_role(user) -> Optional[str]:
    return getattr(user, "role", None)


def is_admin(user) -> bool:
    return bool(
        user
        and getattr(user, "is_authenticated", False)
        and get_user_role(user) == ROLE_ADMIN
    )


def is_ban_active(user, *, now=None) -> bool:
    """
    A ban with an expiry in the past no longer applies.
    """
    if not getattr(user, "banned", False):
        return False

    expires = getattr(user, "ban_expires", None)
    if expires is None:
        return True

    return expires > (now or timezone.now())


# =========================================================
# Base Role Permission (Internal Use)
# =========================================================
class BaseRolePermission(BasePermission):
    """
    Base permission for role-based access control.

    Subclasses must define:
    - allowed_roles (set)
    """

    allowed_roles: set[str] = set()

    def has_permission(self, request, view):
        user = request.user

        if not user or not user.is_authenticated:
            return False

        user_role = get_user_role(user)
        if not user_role:
            return False

        return user_role in self.allowed_roles


class IsAdmin(BaseRolePermission):
    message = "Admin rights required."
    allowed_roles = {ROLE_ADMIN}


class IsCustomer(BaseRolePermission):
    allowed_roles = ALL_ROLES


class IsNotBanned(BasePermission):
    message = "This account is banned."

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return True
        return not is_ban_active(user)


class IsOwnerOrAdmin(BasePermission):
    """
    Object-level rule: the object's `user` (or `user_id`) must be the caller,
    unless the caller is an admin.

    Usage:
        view.owner_only_methods = {"PATCH", "PUT"}  -> admins are refused for these methods
    """

    message = "You do not have access to this resource."

    def has_object_permission(self, request, view, obj):
        owner_id = getattr(obj, "user_id", None)
        is_owner = owner_id is not None and owner_id == getattr(request.user, "id", None)

        if is_owner:
            return True

        if request.method in getattr(view, "owner_only_methods", ()):
            return False

        return is_admin(request.user)
