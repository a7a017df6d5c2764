"""Gate-scan attendance verification.

A scan flips ``verified`` exactly once. Scanning the same pass again reports that it
was already used and leaves the original timestamp alone.
"""

from dataclasses import dataclass

import structlog
from django.db.models import TextChoices
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from events.models import Registration

logger = structlog.get_logger(__name__)


class AttendanceStatus(TextChoices):
    VERIFIED = "verified"
    ALREADY_VERIFIED = "already_verified"
    INVALID = "invalid"


@dataclass(frozen=True)
class AttendanceResult:
    status: AttendanceStatus
    registration: Registration | None = None

    @property
    def ok(self) -> bool:
        return self.status != AttendanceStatus.INVALID

    @property
    def message(self) -> str:
        messages = {
            AttendanceStatus.VERIFIED: _("Attendance verified"),
            AttendanceStatus.ALREADY_VERIFIED: _("Already verified"),
            AttendanceStatus.INVALID: _("Invalid QR code"),
        }
        return str(messages[self.status])


def verify_attendance(reg_code: str) -> AttendanceResult:
    """Mark the registration behind ``reg_code`` as attended.

    The flip is a single conditional UPDATE, so two concurrent scans of the same pass
    produce exactly one ``VERIFIED`` and one ``ALREADY_VERIFIED``.
    """
    updated = Registration.objects.filter(reg_code=reg_code, verified=False).update(
        verified=True, verified_at=timezone.now(), updated_at=timezone.now()
    )
    registration = Registration.objects.with_event().filter(reg_code=reg_code).first()

    if registration is None:
        logger.info("attendance_scan_invalid", reg_code=reg_code)
        return AttendanceResult(status=AttendanceStatus.INVALID)

    if updated:
        logger.info("attendance_verified", reg_code=reg_code, event_id=str(registration.event_id))
        return AttendanceResult(status=AttendanceStatus.VERIFIED, registration=registration)

    logger.info("attendance_already_verified", reg_code=reg_code, event_id=str(registration.event_id))
    return AttendanceResult(status=AttendanceStatus.ALREADY_VERIFIED, registration=registration)
