# src/events/admin/registration.py
"""Admin class for Registration."""

from django.contrib import admin
from unfold.admin import ModelAdmin

from events import models
from events.admin.base import EventLinkMixin, UserLinkMixin


@admin.register(models.Registration)
class RegistrationAdmin(ModelAdmin, UserLinkMixin, EventLinkMixin):  # type: ignore[misc]
    """Registrations are read-only here. They are only ever created through the payment flow."""

    list_display = [
        "student_name",
        "register_no",
        "event_link",
        "user_link",
        "amount_paid",
        "verified",
        "verified_at",
        "certificate_issued_at",
    ]
    list_filter = ["verified", "event__name"]
    search_fields = ["student_name", "register_no", "reg_code", "payment_id", "order_id", "user__email"]
    readonly_fields = [
        "id",
        "event",
        "user",
        "reg_code",
        "order_id",
        "payment_id",
        "amount_paid",
        "verified",
        "verified_at",
        "certificate_issued_at",
        "created_at",
    ]
    date_hierarchy = "created_at"

    def get_queryset(self, request):  # type: ignore[no-untyped-def]
        return super().get_queryset(request).select_related("event", "user")

    def has_add_permission(self, request) -> bool:  # type: ignore[no-untyped-def]
        return False
