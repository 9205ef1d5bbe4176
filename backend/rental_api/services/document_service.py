"""Storage of driving-licence images attached to rental orders."""

from __future__ import annotations

import logging
import re
import time
from io import BytesIO
from pathlib import Path

from fastapi import UploadFile
from PIL import Image, UnidentifiedImageError

from rental_api.core.config import Settings
from rental_api.core.errors import DocumentRejectedError

logger = logging.getLogger(__name__)

LICENSE_SUBDIR = "rent_driving_license"

_ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".gif", ".jfif"})
_ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/pjpeg", "image/png", "image/gif"}
)
_ALLOWED_FORMATS = frozenset({"JPEG", "PNG", "GIF"})
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")

_REJECTION = "Only image files (jpeg, jpg, png, gif, jfif) are allowed!"


def _sanitize_filename(filename: str) -> str:
    name = Path(filename).name
    cleaned = _UNSAFE_CHARS.sub("_", name).strip("._")
    return cleaned or "upload"


def _verify_image(data: bytes) -> None:
    try:
        with Image.open(BytesIO(data)) as image:
            image_format = image.format
            image.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise DocumentRejectedError(_REJECTION) from exc
    if image_format not in _ALLOWED_FORMATS:
        raise DocumentRejectedError(_REJECTION)


def check_upload(filename: str | None, content_type: str | None, data: bytes, *, max_bytes: int) -> None:
    """Raise :class:`DocumentRejectedError` unless the upload is an accepted image."""
    extension = Path(filename or "").suffix.lower()
    if extension not in _ALLOWED_EXTENSIONS:
        raise DocumentRejectedError(_REJECTION)
    if (content_type or "").lower() not in _ALLOWED_CONTENT_TYPES:
        raise DocumentRejectedError(_REJECTION)
    if not data:
        raise DocumentRejectedError("Uploaded file is empty.")
    if len(data) > max_bytes:
        raise DocumentRejectedError("Uploaded file is too large.")
    _verify_image(data)


async def store_license_image(upload: UploadFile, settings: Settings) -> str:
    """Validate and persist an uploaded licence image, returning its reference."""
    data = await upload.read()
    check_upload(
        upload.filename,
        upload.content_type,
        data,
        max_bytes=settings.upload_max_bytes,
    )

    target_dir = Path(settings.upload_dir) / LICENSE_SUBDIR
    target_dir.mkdir(parents=True, exist_ok=True)
    stored_name = (
        f"licenseImage{int(time.time() * 1000)}_{_sanitize_filename(upload.filename or '')}"
    )
    target = target_dir / stored_name
    target.write_bytes(data)
    logger.info("Stored licence image %s (%d bytes)", stored_name, len(data))
    return f"{LICENSE_SUBDIR}/{stored_name}"


def resolve_document(reference: str, settings: Settings) -> Path:
    """Map a stored reference back to its path under the upload directory."""
    base = Path(settings.upload_dir).resolve()
    path = (base / reference).resolve()
    if not path.is_relative_to(base):
        raise ValueError("Document reference escapes the upload directory")
    return path


def discard_document(reference: str | None, settings: Settings) -> None:
    """Remove a stored image that no order ended up referencing."""
    if not reference:
        return
    path = resolve_document(reference, settings)
    path.unlink(missing_ok=True)
    logger.info("Discarded unreferenced licence image %s", reference)
