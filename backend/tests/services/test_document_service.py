"""Tests for licence image validation and storage."""

from __future__ import annotations

from io import BytesIO
from pathlib import Path

import pytest
from fastapi import UploadFile
from PIL import Image
from starlette.datastructures import Headers

from rental_api.core.config import get_settings
from rental_api.core.errors import DocumentRejectedError
from rental_api.services import document_service


def _upload(data: bytes, filename: str, content_type: str) -> UploadFile:
    return UploadFile(
        file=BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.parametrize(
    ("filename", "content_type"),
    [
        ("notes.txt", "text/plain"),
        ("license.pdf", "application/pdf"),
        ("license.png", "application/octet-stream"),
        ("license", "image/png"),
    ],
)
def test_non_image_uploads_are_rejected(
    png_bytes: bytes, filename: str, content_type: str
) -> None:
    with pytest.raises(DocumentRejectedError):
        document_service.check_upload(
            filename, content_type, png_bytes, max_bytes=1024 * 1024
        )


def test_disguised_payload_is_rejected() -> None:
    with pytest.raises(DocumentRejectedError):
        document_service.check_upload(
            "license.png", "image/png", b"not really a png", max_bytes=1024
        )


def test_unsupported_image_format_is_rejected() -> None:
    buffer = BytesIO()
    Image.new("RGB", (4, 4)).save(buffer, format="BMP")
    with pytest.raises(DocumentRejectedError):
        document_service.check_upload(
            "license.png", "image/png", buffer.getvalue(), max_bytes=1024 * 1024
        )


def test_oversized_and_empty_uploads_are_rejected(png_bytes: bytes) -> None:
    with pytest.raises(DocumentRejectedError, match="too large"):
        document_service.check_upload(
            "license.png", "image/png", png_bytes, max_bytes=len(png_bytes) - 1
        )
    with pytest.raises(DocumentRejectedError, match="empty"):
        document_service.check_upload("license.png", "image/png", b"", max_bytes=1024)


@pytest.mark.asyncio
async def test_store_and_discard_licence_image(
    reset_database, upload_dir: Path, png_bytes: bytes
) -> None:
    settings = get_settings()
    reference = await document_service.store_license_image(
        _upload(png_bytes, "my licence.png", "image/png"), settings
    )

    assert reference.startswith("rent_driving_license/licenseImage")
    assert reference.endswith("_my_licence.png")
    stored = document_service.resolve_document(reference, settings)
    assert stored.read_bytes() == png_bytes
    assert stored.is_relative_to(upload_dir.resolve())

    document_service.discard_document(reference, settings)
    assert not stored.exists()


@pytest.mark.asyncio
async def test_reference_cannot_escape_upload_dir(reset_database) -> None:
    with pytest.raises(ValueError):
        document_service.resolve_document("../../etc/passwd", get_settings())
