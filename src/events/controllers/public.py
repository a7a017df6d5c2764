"""Unauthenticated endpoints reached through the QR pass.

The registration code in the URL is the only credential.
"""

from django.http import HttpResponse, JsonResponse
from django.template.loader import render_to_string
from ninja_extra import (
    ControllerBase,
    api_controller,
    route,
)

from common.throttling import GateScanThrottle
from events.service import certificate_service
from events.service.attendance_service import AttendanceStatus, verify_attendance


@api_controller("", tags=["Gate"], throttle=GateScanThrottle())
class GateController(ControllerBase):
    def wants_json(self) -> bool:
        accept = self.context.request.headers.get("Accept", "")  # type: ignore[union-attr]
        return "application/json" in accept

    @route.get("/verify/{reg_code}", url_name="verify_attendance", response={200: None, 404: None})
    def verify(self, reg_code: str) -> HttpResponse:
        """Gate scan: mark the holder of this pass as attended.

        Opened by a phone camera, so the answer is a small HTML page unless the client asks
        for `application/json`. Scanning a pass twice is harmless and answers "Already verified".
        Unknown codes answer 404.
        """
        result = verify_attendance(reg_code)
        status = 404 if result.status == AttendanceStatus.INVALID else 200
        if self.wants_json():
            return JsonResponse({"status": result.status.value, "message": result.message}, status=status)
        html = render_to_string(
            "events/attendance_result.html",
            context={"title": result.message, "ok": result.ok, "registration": result.registration},
        )
        return HttpResponse(html, status=status, content_type="text/html; charset=utf-8")

    @route.get("/certificate/{reg_code}", url_name="download_certificate", response={200: None})
    def certificate(self, reg_code: str) -> HttpResponse:
        """Download the participation certificate. Works exactly once per verified registration."""
        registration, pdf = certificate_service.issue_certificate(reg_code)
        response = HttpResponse(pdf, content_type="application/pdf")
        response["Content-Disposition"] = (
            f'attachment; filename="{certificate_service.certificate_filename(registration)}"'
        )
        return response
