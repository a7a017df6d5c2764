# src/events/admin/base.py
"""Base admin components: mixins and inlines."""

import typing as t

from django.urls import reverse
from django.utils.html import format_html
from unfold.admin import TabularInline

from events import models


class UserLinkMixin:
    """Mixin to add a link to a user."""

    def user_link(self, obj: t.Any) -> str:
        user = getattr(obj, "user", getattr(obj, "organizer", None))
        url = reverse("admin:accounts_gatepassuser_change", args=[user.id])  # type: ignore[union-attr]
        return format_html('<a href="{}">{}</a>', url, user.email)  # type: ignore[union-attr]

    user_link.short_description = "User"  # type: ignore[attr-defined]


class EventLinkMixin:
    """Mixin to add a link to an event."""

    def event_link(self, obj: t.Any) -> str | None:
        if not hasattr(obj, "event") or not obj.event:
            return None
        url = reverse("admin:events_event_change", args=[obj.event.id])
        return format_html('<a href="{}">{}</a>', url, obj.event.name)

    event_link.short_description = "Event"  # type: ignore[attr-defined]


class RegistrationInline(TabularInline):  # type: ignore[misc]
    model = models.Registration
    extra = 0
    can_delete = False
    fields = ["student_name", "register_no", "department", "user", "amount_paid", "verified", "certificate_issued_at"]
    readonly_fields = fields
    show_change_link = True

    def has_add_permission(self, request: t.Any, obj: t.Any = None) -> bool:
        return False
