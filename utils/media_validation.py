"""Validation and encoding helpers for uploaded swing photos."""

import base64
import binascii
from typing import Tuple

from fastapi import HTTPException, UploadFile

from models.chat_models import ImageRef
from services.thumbnail_generator import ThumbnailGenerator

ALLOWED_IMAGE_TYPES = {
    "image/jpeg",
    "image/jpg",
    "image/png",
    "image/webp",
    "image/gif",
}


def normalize_mime_type(mime_type: str | None) -> str:
    """Strip parameters and lowercase a MIME type (e.g. 'image/JPEG; q=1')."""
    return (mime_type or "").lower().split(";", 1)[0].strip()


def ensure_image_type(mime_type: str | None) -> str:
    """Return the normalized MIME type or raise HTTP 415 when it is not an image we accept."""
    normalized = normalize_mime_type(mime_type)
    if normalized not in ALLOWED_IMAGE_TYPES:
        raise HTTPException(status_code=415, detail=f"Unsupported image content type: {mime_type or 'missing'}")
    return "image/jpeg" if normalized == "image/jpg" else normalized


def encode_image(image: ImageRef) -> Tuple[str, str]:
    """Return the attachment as (base64 text, MIME type) for transport."""
    if not image.data:
        raise ValueError("Image attachment is empty.")
    return base64.b64encode(image.data).decode("ascii"), image.mime_type


def decode_base64_image(image_b64: str) -> bytes:
    """Decode base64 image text, accepting an optional data URL prefix."""
    text = (image_b64 or "").strip()
    if text.startswith("data:") and "," in text:
        text = text.split(",", 1)[1]
    if not text:
        raise ValueError("Image payload is required.")
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValueError("Image payload must be base64-encoded.") from exc


def build_image_ref(image_bytes: bytes, mime_type: str | None, filename: str | None = None) -> ImageRef:
    """Validate image bytes and wrap them with a preview thumbnail.

    Raises:
        HTTPException(415): When the MIME type is not an accepted image type.
        ValueError: When the bytes are empty or not a decodable image.
    """
    normalized = ensure_image_type(mime_type)
    if not image_bytes:
        raise ValueError("Uploaded image is empty.")
    preview = ThumbnailGenerator().create_thumbnail(image_bytes)
    return ImageRef(data=image_bytes, mime_type=normalized, filename=filename or "upload", preview=preview)


async def read_image_upload(image: UploadFile) -> ImageRef:
    """Read and validate an uploaded image file."""
    ensure_image_type(image.content_type)
    try:
        image_bytes = await image.read()
    except Exception as exc:
        raise HTTPException(status_code=400, detail="Unable to read uploaded image.") from exc
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Uploaded image is empty.")
    return build_image_ref(image_bytes, image.content_type, image.filename)
