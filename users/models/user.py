"""
PATH: users/models/user.py

CUSTOM USER MODEL

Identity:
- email is the login identifier (unique, normalized)
- name is the display name shown on orders, invoices and emails

Roles:
- "admin": back-office access (catalog, orders, returns, users)
- "user":  storefront customer (default)

Moderation:
- banned + ban_reason + ban_expires (None = permanent)
- an expired ban no longer blocks login (see permissions.roles.is_ban_active)
"""

from __future__ import annotations

import uuid

from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from permissions.roles import ROLE_ADMIN, ROLE_CHOICES, ROLE_USER, is_ban_active


# ---------------- USER MANAGER ----------------
class UserManager(BaseUserManager):
    def create_user(self, email=None, password=None, **extra_fields):
        """
        Rules:
        - email is required and normalized
        - name defaults to the email local-part
        - a user without password gets an unusable password
        """
        email = (email or "").strip()
        if not email:
            raise ValueError("An email address is required")

        email = self.normalize_email(email)

        name = (extra_fields.pop("name", "") or "").strip()
        if not name:
            name = email.split("@")[0]

        extra_fields.setdefault("role", ROLE_USER)
        extra_fields.setdefault("is_active", True)
        extra_fields.setdefault("is_staff", extra_fields["role"] == ROLE_ADMIN)

        user = self.model(email=email, name=name, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Superuser must have an email")
        if not password:
            raise ValueError("Superuser must have a password")

        extra_fields.setdefault("role", ROLE_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        extra_fields.setdefault("is_active", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser must have is_staff=True")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser must have is_superuser=True")

        return self.create_user(email=email, password=password, **extra_fields)


# ---------------- USER MODEL ----------------
class User(AbstractBaseUser, PermissionsMixin):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    email = models.EmailField(unique=True)
    name = models.CharField(max_length=150, blank=True, default="")

    role = models.CharField(max_length=20, choices=ROLE_CHOICES, default=ROLE_USER)

    banned = models.BooleanField(default=False)
    ban_reason = models.TextField(blank=True, default="")
    ban_expires = models.DateTimeField(null=True, blank=True)

    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = []

    class Meta:
        ordering = ["-created_at"]

    def clean(self):
        if self.email:
            self.email = self.__class__.objects.normalize_email(self.email).strip()
        if not self.email:
            raise ValidationError("User must have an email")

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN

    @property
    def is_banned(self) -> bool:
        return is_ban_active(self)

    # -------------------------
    # Controlled transitions
    # -------------------------
    def ban(self, *, reason: str, expires=None) -> None:
        self.banned = True
        self.ban_reason = (reason or "").strip()
        self.ban_expires = expires
        self.save(update_fields=["banned", "ban_reason", "ban_expires", "updated_at"])

    def unban(self) -> None:
        self.banned = False
        self.ban_reason = ""
        self.ban_expires = None
        self.save(update_fields=["banned", "ban_reason", "ban_expires", "updated_at"])

    def set_role(self, role: str) -> None:
        self.role = role
        self.is_staff = role == ROLE_ADMIN or self.is_superuser
        self.save(update_fields=["role", "is_staff", "updated_at"])

    def __str__(self):
        return f"{self.email} ({self.role})"
