import typing as t
from datetime import timedelta

import pytest
from django.utils import timezone
from freezegun import freeze_time

from events.models import Registration
from events.service.attendance_service import AttendanceStatus, verify_attendance

pytestmark = pytest.mark.django_db


def test_first_scan_verifies(registration: Registration) -> None:
    result = verify_attendance(registration.reg_code)

    assert result.status == AttendanceStatus.VERIFIED
    assert result.ok is True
    assert result.message == "Attendance verified"
    registration.refresh_from_db()
    assert registration.verified is True
    assert registration.verified_at is not None
    assert registration.status == Registration.Status.VERIFIED


def test_second_scan_keeps_original_timestamp(registration: Registration) -> None:
    first_scan = timezone.now()
    with freeze_time(first_scan):
        verify_attendance(registration.reg_code)

    with freeze_time(first_scan + timedelta(hours=2)):
        result = verify_attendance(registration.reg_code)

    assert result.status == AttendanceStatus.ALREADY_VERIFIED
    assert result.ok is True
    assert result.message == "Already verified"
    registration.refresh_from_db()
    assert registration.verified_at == first_scan


@pytest.mark.parametrize("code", ["00000000-0000-0000-0000-000000000000", "not-a-code", ""])
def test_unknown_code_is_invalid(registration: Registration, code: str) -> None:
    result = verify_attendance(code)

    assert result.status == AttendanceStatus.INVALID
    assert result.ok is False
    assert result.registration is None
    assert result.message == "Invalid QR code"


def test_scan_only_touches_its_registration(registration: Registration, other_student: t.Any) -> None:
    other = Registration.objects.create(
        event=registration.event,
        user=other_student,
        student_name="Ravi Kumar",
        register_no="21CS043",
        department="Computer Science",
    )

    verify_attendance(registration.reg_code)

    other.refresh_from_db()
    assert other.verified is False
    assert other.verified_at is None
