from django.db.models import QuerySet
from django.http import Http404
from ninja_extra import (
    api_controller,
    route,
)
from ninja_extra.pagination import PageNumberPaginationExtra, PaginatedResponseSchema, paginate

from common.authentication import AnyUserAuth
from events import models, schema
from events.service import registration_service

from .user_aware_controller import UserAwareController


@api_controller("/student", auth=AnyUserAuth(), tags=["Student"])
class StudentController(UserAwareController):
    @route.get(
        "/registrations",
        url_name="list_my_registrations",
        response=PaginatedResponseSchema[schema.StudentRegistrationSchema],
    )
    @paginate(PageNumberPaginationExtra, page_size=20)
    def list_registrations(self) -> QuerySet[models.Registration]:
        """List your registrations, newest first, with attendance and certificate state."""
        return registration_service.registrations_for_user(self.user())

    @route.get(
        "/registrations/{reg_code}/pass",
        url_name="get_registration_pass",
        response=schema.RegistrationPassSchema,
    )
    def get_pass(self, reg_code: str) -> schema.RegistrationPassSchema:
        """Fetch the QR gate pass for one of your registrations again."""
        try:
            registration, qr_image, pass_error = registration_service.get_registration_pass(reg_code, self.user())
        except models.Registration.DoesNotExist:
            raise Http404()
        return schema.RegistrationPassSchema(
            reg_code=registration.reg_code,
            status=registration.status,
            qr_image=qr_image,
            pass_error=pass_error,
        )
