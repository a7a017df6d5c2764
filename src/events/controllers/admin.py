from django.db.models import QuerySet
from ninja_extra import (
    ControllerBase,
    api_controller,
    route,
)
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate
from ninja_extra.searching import Searching, searching

from common.authentication import AdminAuth
from events import models, schema


@api_controller("/admin", auth=AdminAuth(), tags=["Admin"])
class AdminController(ControllerBase):
    @route.get("/events", url_name="admin_list_events", response=PaginatedResponseSchema[schema.AdminEventSchema])
    @paginate(PageNumberPaginationExtra, page_size=50)
    @searching(Searching, search_fields=["name", "venue", "organizer__email"])
    def list_events(self) -> QuerySet[models.Event]:
        """List every event on the platform with its organizer and registration count."""
        return models.Event.objects.full()
