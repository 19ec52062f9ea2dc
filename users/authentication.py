"""
PATH: users/authentication.py

JWT authentication that also enforces moderation state.

A token issued before a ban stays cryptographically valid until it expires;
this class refuses it as soon as the ban is active.
"""

from __future__ import annotations

import logging

from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication

from permissions.roles import is_ban_active

logger = logging.getLogger(__name__)


class ActiveJWTAuthentication(JWTAuthentication):
    def get_user(self, validated_token):
        user = super().get_user(validated_token)

        if is_ban_active(user):
            logger.info("Rejected token for banned user", extra={"user_id": str(user.id)})
            raise exceptions.PermissionDenied("This account is banned.")

        return user
