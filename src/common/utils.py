from io import BytesIO

from django.core.files import File
from django.core.files.uploadedfile import InMemoryUploadedFile
from PIL import Image


def strip_exif(image_file: File) -> InMemoryUploadedFile:  # type: ignore[type-arg]
    """Strip EXIF data from a Django File or InMemoryUploadedFile."""
    image = Image.open(image_file)
    data = list(image.getdata())
    image_no_exif = Image.new(image.mode, image.size)
    image_no_exif.putdata(data)

    output = BytesIO()
    _format = image.format or "JPEG"
    image_no_exif.save(output, format=_format)
    output.seek(0)

    field_name = getattr(image_file, "field_name", "image")
    name = getattr(image_file, "name", "image.jpg")
    content_type = getattr(image_file, "content_type", "image/jpeg")

    return InMemoryUploadedFile(
        output,
        field_name=field_name,
        name=name,
        content_type=content_type,
        size=output.getbuffer().nbytes,
        charset=None,
    )


def file_size_mb(file: File) -> float:  # type: ignore[type-arg]
    """Return the size of an uploaded file in megabytes."""
    size = getattr(file, "size", None)
    if size is None:  # pragma: no cover
        size = len(file.read())
        file.seek(0)
    return float(size) / (1024 * 1024)
