"""Reference image encoding helpers.

Reference images travel through the system as data URLs
(``data:image/png;base64,...``), the same text form the history file stores.
These helpers convert uploaded files into that form and back into raw bytes
plus a mime type for the generative backend.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path

from PIL import Image, UnidentifiedImageError

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/png"

# Longest edge of stored reference images; larger uploads are downscaled so the
# history file stays small.
MAX_REFERENCE_EDGE = 1600

# Image types the generative backend accepts
BACKEND_MIME_TYPES = frozenset(
    {"image/png", "image/jpeg", "image/webp", "image/heic", "image/heif"}
)

# Pillow formats whose bytes are readable under another mime type.
# MPO (multi-picture JPEG from phones and cameras) starts with a plain JPEG.
MIME_OVERRIDES = {"MPO": "image/jpeg"}


def image_mime_type(fmt: str) -> str:
    """Mime type for a Pillow format name (``"JPEG"``, ``"MPO"``...)."""
    fmt = fmt.upper()
    return MIME_OVERRIDES.get(fmt) or Image.MIME.get(fmt, DEFAULT_MIME_TYPE)


def _to_png(img: Image.Image) -> bytes:
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


def encode_image_file(path: str | Path, max_edge: int = MAX_REFERENCE_EDGE) -> str:
    """Read an image file and return it as a data URL.

    Images larger than ``max_edge`` on their longest side are downscaled and
    re-encoded as PNG, as are formats the backend does not accept (GIF, BMP,
    TIFF...). Other images keep their original bytes.

    Args:
        path: Image file on disk (e.g. a Gradio upload).
        max_edge: Maximum allowed edge length in pixels.

    Returns:
        ``data:<mime>;base64,<payload>`` string.

    Raises:
        ValueError: If the file is not a readable image.
    """
    raw = Path(path).read_bytes()
    try:
        with Image.open(io.BytesIO(raw)) as img:
            mime = image_mime_type(img.format or "PNG")
            if max(img.size) > max_edge:
                img.thumbnail((max_edge, max_edge), Image.LANCZOS)
                raw = _to_png(img)
                mime = DEFAULT_MIME_TYPE
            elif mime not in BACKEND_MIME_TYPES:
                logger.info(f"Re-encoding {mime} reference image as PNG")
                raw = _to_png(img)
                mime = DEFAULT_MIME_TYPE
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError(f"Unsupported image file: {Path(path).name}") from e

    payload = base64.b64encode(raw).decode("ascii")
    return f"data:{mime};base64,{payload}"


def decode_reference_image(data: str) -> tuple[bytes, str]:
    """Split a data URL (or bare base64 string) into bytes and a mime type.

    Bare base64 input has no declared type and is sent as ``image/png``.

    Raises:
        ValueError: If the payload is not valid base64.
    """
    mime = DEFAULT_MIME_TYPE
    payload = data
    if data.startswith("data:") and "," in data:
        header, payload = data.split(",", 1)
        declared = header[len("data:"):].split(";", 1)[0]
        if declared:
            mime = declared

    try:
        return base64.b64decode(payload, validate=True), mime
    except (binascii.Error, ValueError) as e:
        raise ValueError("Reference image is not valid base64 data") from e


def reference_thumbnail(data: str, size: int = 96) -> Image.Image:
    """Decode a stored reference image into a small RGB thumbnail.

    Raises:
        ValueError: If the data is not a decodable image.
    """
    raw, _ = decode_reference_image(data)
    try:
        with Image.open(io.BytesIO(raw)) as img:
            thumb = img.convert("RGB")
    except (UnidentifiedImageError, OSError) as e:
        raise ValueError("Reference image could not be decoded") from e
    thumb.thumbnail((size, size))
    return thumb
