import base64
import typing as t
from io import BytesIO

import qrcode
from django.template.loader import render_to_string
from django.utils import timezone

from .models import Registration


def make_qr_png(data: str) -> bytes:
    """Render ``data`` as a QR code PNG."""
    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_L,
        box_size=10,
        border=4,
    )
    qr.add_data(data)
    qr.make(fit=True)
    img = qr.make_image(fill_color="black", back_color="white")

    buffered = BytesIO()
    img.save(buffered, "PNG")
    return buffered.getvalue()


def create_registration_qr_data_url(registration: Registration) -> str:
    """Build the gate pass for a registration.

    The QR code encodes the public verification link, so any phone camera can
    perform the gate scan.

    Returns:
        A ``data:image/png;base64,...`` URL ready to drop into an ``<img>`` tag.
    """
    png = make_qr_png(registration.verification_url)
    return "data:image/png;base64," + base64.b64encode(png).decode("utf-8")


def html_to_pdf(html_string: str) -> bytes:
    """Render an HTML document to PDF with weasyprint."""
    # weasyprint loads pango at import time; keep it out of module import.
    from weasyprint import HTML

    return t.cast(bytes, HTML(string=html_string).write_pdf())


def create_certificate_pdf(registration: Registration) -> bytes:
    """Generates a participation certificate using weasyprint.

    Args:
        registration: The Registration, with its event and organizer prefetched.

    Returns:
        The PDF content as bytes.
    """
    event = registration.event
    issued_at = registration.certificate_issued_at or timezone.now()
    context_data = {
        "participant_name": registration.student_name,
        "register_no": registration.register_no,
        "department": registration.department,
        "event_name": event.name,
        "event_date": event.date.strftime("%A, %B %d, %Y"),
        "venue": event.venue,
        "organizer_name": event.organizer.get_display_name(),
        "issued_on": timezone.localtime(issued_at).strftime("%B %d, %Y"),
        "certificate_id": registration.reg_code,
    }

    html_string = render_to_string("events/certificate.html", context=context_data)
    return html_to_pdf(html_string)
