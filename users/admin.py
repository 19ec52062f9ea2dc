# users/admin.py

"""
Superuser console for accounts.

Moderation mirrors /api/admin/users/: the ban / unban actions go through
User.ban() and User.unban() so the JWT check sees the same state.
"""

from __future__ import annotations

from django.contrib import admin, messages
from django.contrib.auth import get_user_model
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from permissions.roles import is_ban_active

User = get_user_model()

ADMIN_BAN_REASON = "Banned from the Django admin"


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    ordering = ("-created_at",)
    list_display = ("email", "name", "role", "ban_state", "created_at")
    list_filter = ("role", "banned")
    search_fields = ("email", "name")
    readonly_fields = ("created_at", "updated_at", "last_login")
    actions = ("ban_accounts", "unban_accounts")

    fieldsets = (
        (None, {"fields": ("email", "password")}),
        ("Profile", {"fields": ("name", "role")}),
        ("Moderation", {"fields": ("banned", "ban_reason", "ban_expires")}),
        ("Access", {"fields": ("is_active", "is_superuser")}),
        ("Dates", {"fields": ("last_login", "created_at", "updated_at")}),
    )

    add_fieldsets = (
        (None, {"classes": ("wide",), "fields": ("email", "name", "role", "password1", "password2")}),
    )

    @admin.display(description="Ban", boolean=True)
    def ban_state(self, obj):
        return is_ban_active(obj)

    @admin.action(description="Ban selected accounts")
    def ban_accounts(self, request, queryset):
        count = 0
        for user in queryset.exclude(pk=request.user.pk):
            user.ban(reason=ADMIN_BAN_REASON)
            count += 1
        self.message_user(request, f"{count} account(s) banned.", messages.SUCCESS)

    @admin.action(description="Lift the ban on selected accounts")
    def unban_accounts(self, request, queryset):
        for user in queryset:
            user.unban()
        self.message_user(request, f"{queryset.count()} account(s) unbanned.", messages.SUCCESS)
