# src/events/admin/event.py
"""Admin class for Event."""

from django.contrib import admin
from unfold.admin import ModelAdmin

from events import models
from events.admin.base import RegistrationInline, UserLinkMixin


@admin.register(models.Event)
class EventAdmin(ModelAdmin, UserLinkMixin):  # type: ignore[misc]
    """Admin model for Events."""

    list_display = ["name", "user_link", "date", "venue", "fee_display", "seats_display"]
    list_filter = ["date"]
    search_fields = ["name", "venue", "organizer__email", "organizer__name"]
    autocomplete_fields = ["organizer"]
    date_hierarchy = "date"

    fieldsets = [
        ("Details", {"fields": ("organizer", "name", "venue", "description", "thumbnail")}),
        ("Schedule", {"fields": ("date", ("start_time", "end_time"))}),
        ("Registration", {"fields": (("max_seats", "registration_fee"),)}),
    ]

    inlines = [RegistrationInline]

    def get_queryset(self, request):  # type: ignore[no-untyped-def]
        return super().get_queryset(request).with_organizer().with_registration_count()

    @admin.display(description="Fee")
    def fee_display(self, obj: models.Event) -> str:
        return "Free" if obj.is_free else f"{obj.registration_fee}"

    @admin.display(description="Seats")
    def seats_display(self, obj: models.Event) -> str:
        limit = obj.max_seats if obj.max_seats > 0 else "∞"
        return f"{obj.used_seats()} / {limit}"
