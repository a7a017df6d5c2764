"""Single-shot participation certificates."""

import structlog
from django.db import transaction
from django.http import Http404
from django.utils import timezone

from events.exceptions import AttendanceNotVerifiedError, CertificateAlreadyIssuedError, CertificateRenderError
from events.models import Registration
from events.utils import create_certificate_pdf

logger = structlog.get_logger(__name__)


@transaction.atomic
def issue_certificate(reg_code: str) -> tuple[Registration, bytes]:
    """Issue the certificate for a verified registration and render it.

    The issuance stamp is claimed with a conditional UPDATE, so of any number of concurrent
    requests exactly one gets the PDF. If rendering fails the stamp is rolled back and the
    certificate can be requested again.

    Raises:
        Http404: Unknown registration code.
        AttendanceNotVerifiedError: The holder was never scanned at the gate.
        CertificateAlreadyIssuedError: The certificate was already handed out.
        CertificateRenderError: The PDF could not be produced.
    """
    now = timezone.now()
    claimed = Registration.objects.filter(reg_code=reg_code, verified=True, certificate_issued_at__isnull=True).update(
        certificate_issued_at=now, updated_at=now
    )
    registration = Registration.objects.full().filter(reg_code=reg_code).first()

    if registration is None:
        raise Http404()
    if not claimed:
        if not registration.verified:
            raise AttendanceNotVerifiedError()
        logger.info("certificate_reissue_refused", reg_code=reg_code)
        raise CertificateAlreadyIssuedError()

    try:
        pdf = create_certificate_pdf(registration)
    except Exception as e:
        logger.exception("certificate_render_failed", reg_code=reg_code)
        raise CertificateRenderError() from e

    logger.info("certificate_issued", reg_code=reg_code, event_id=str(registration.event_id))
    return registration, pdf


def certificate_filename(registration: Registration) -> str:
    return f"certificate-{registration.reg_code}.pdf"
