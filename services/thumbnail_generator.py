"""Preview thumbnails for swing photos attached to a chat turn.

The preview travels with the transcript instead of the full upload, so it
is kept small: it fits within PREVIEW_SIZE and is always a flattened PNG.

Example:
    preview_b64 = ThumbnailGenerator().create_thumbnail(image_bytes)
"""
from __future__ import annotations

import base64
import io
from typing import Tuple

from PIL import Image, UnidentifiedImageError

PREVIEW_SIZE = (160, 160)
WHITE = (255, 255, 255)


class ThumbnailGenerator:
    """Shrink an uploaded photo into a base64 PNG preview.

    Transparent regions are painted over `background` so every preview
    renders the same on light and dark chat themes.
    """

    def __init__(self, max_size: Tuple[int, int] = PREVIEW_SIZE, background: Tuple[int, int, int] = WHITE):
        self.max_size = max_size
        self.background = background

    def create_thumbnail(self, data: bytes) -> str:
        """Return the preview of raw image bytes as base64 PNG text.

        Raises:
            ValueError: If Pillow cannot decode the bytes.
        """
        try:
            photo = Image.open(io.BytesIO(data))
            photo.load()
        except (UnidentifiedImageError, OSError) as exc:
            raise ValueError("Uploaded file is not a supported image format.") from exc

        photo = photo.convert("RGBA")
        photo.thumbnail(self.max_size, Image.LANCZOS)

        canvas = Image.new("RGB", photo.size, self.background)
        canvas.paste(photo, mask=photo.getchannel("A"))

        buffer = io.BytesIO()
        canvas.save(buffer, format="PNG", optimize=True)
        return base64.b64encode(buffer.getvalue()).decode("ascii")
