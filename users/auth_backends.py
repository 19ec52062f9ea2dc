"""
PATH: users/auth_backends.py

EMAIL LOGIN BACKEND

- The identifier is the email, matched case-insensitively.
- Inactive accounts never authenticate (ModelBackend.user_can_authenticate).
- Banned accounts DO authenticate here; LoginView turns an active ban into a
  403 carrying the ban reason, which the storefront displays.

Subclassing ModelBackend keeps Django admin permissions (has_perm) working.
"""

from __future__ import annotations

from django.contrib.auth import get_user_model
from django.contrib.auth.backends import ModelBackend


class EmailBackend(ModelBackend):
    def authenticate(self, request, username=None, password=None, **kwargs):
        User = get_user_model()

        identifier = (kwargs.get("email") or username or "").strip()
        if not identifier or password is None:
            return None

        user = User._default_manager.filter(email__iexact=identifier).first()
        if user is None:
            # timing parity with a wrong password
            User().set_password(password)
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None
