from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from app.platform.config import settings
from app.platform.exceptions import FieldValidationError

DOCUMENT_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp", ".pdf"}
DOCUMENT_CONTENT_TYPES = {"image/jpeg", "image/png", "image/webp", "application/pdf"}


@dataclass
class FilePart:
    """An uploaded file held in memory until it is forwarded to the backend."""

    filename: str
    content: bytes
    content_type: str

    def as_multipart(self):
        return (self.filename, self.content, self.content_type)


def _size_label(limit: int) -> str:
    return f"{limit // (1024 * 1024)}MB"


async def read_document(file: Optional[UploadFile], field: str = "aadhaar_document") -> Optional[FilePart]:
    """
    Read an identity document (image or PDF).

    Args:
        file: The uploaded file, or None when the form had no file
        field: Form field name used in the error message

    Returns:
        FilePart, or None if nothing was uploaded

    Raises:
        FieldValidationError: If the file has the wrong type or is too large
    """
    if file is None or not file.filename:
        return None

    file_ext = Path(file.filename).suffix.lower()
    if file_ext not in DOCUMENT_EXTENSIONS or file.content_type not in DOCUMENT_CONTENT_TYPES:
        raise FieldValidationError(field, "Please upload an image or PDF document")

    contents = await file.read()
    if len(contents) > settings.MAX_DOCUMENT_SIZE:
        raise FieldValidationError(
            field, f"File size should be less than {_size_label(settings.MAX_DOCUMENT_SIZE)}"
        )

    return FilePart(file.filename, contents, file.content_type)


async def read_video(file: Optional[UploadFile], field: str = "verification_video") -> Optional[FilePart]:
    """Read a skill verification video; any video/* type is accepted."""
    if file is None or not file.filename:
        return None

    if not (file.content_type or "").startswith("video/"):
        raise FieldValidationError(field, "Please upload a video file")

    contents = await file.read()
    if len(contents) > settings.MAX_VIDEO_SIZE:
        raise FieldValidationError(
            field, f"Video size should be less than {_size_label(settings.MAX_VIDEO_SIZE)}"
        )

    return FilePart(file.filename, contents, file.content_type)
