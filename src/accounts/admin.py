"""Admin interface for accounts app."""

import typing as t

from django.contrib import admin
from django.contrib.auth.admin import UserAdmin
from django.http import HttpRequest
from unfold.admin import ModelAdmin, TabularInline

from accounts.models import GatepassUser
from events.models import Registration


class RegistrationInline(TabularInline):  # type: ignore[misc]
    """Read-only list of the user's registrations."""

    model = Registration
    fk_name = "user"
    extra = 0
    can_delete = False
    fields = ["event", "reg_code", "verified", "verified_at", "certificate_issued_at"]
    readonly_fields = fields

    def has_add_permission(self, request: HttpRequest, obj: t.Any = None) -> bool:
        return False


@admin.register(GatepassUser)
class GatepassUserAdmin(UserAdmin, ModelAdmin):  # type: ignore[type-arg,misc]
    """Admin for GatepassUser with role management."""

    list_display = [
        "username",
        "email",
        "name",
        "role",
        "is_staff",
        "is_active",
        "date_joined",
        "registration_count",
    ]
    list_filter = ["role", "is_staff", "is_superuser", "is_active", "date_joined", "last_login"]
    search_fields = ["username", "email", "name"]
    ordering = ["-date_joined"]
    date_hierarchy = "date_joined"

    readonly_fields = ["id", "date_joined", "last_login"]

    fieldsets = (
        (
            "Personal Information",
            {"fields": ("id", ("username", "email"), "name", "role")},
        ),
        (
            "Authentication",
            {"fields": ("password", ("date_joined", "last_login"))},
        ),
        (
            "Permissions",
            {
                "fields": (("is_active", "is_staff", "is_superuser"), "groups", "user_permissions"),
                "classes": ["collapse"],
            },
        ),
    )
    add_fieldsets = (
        (
            None,
            {
                "classes": ("wide",),
                "fields": ("username", "email", "name", "role", "password1", "password2"),
            },
        ),
    )

    inlines = [RegistrationInline]

    @admin.display(description="Registrations")
    def registration_count(self, obj: GatepassUser) -> int:
        return obj.registrations.count()
