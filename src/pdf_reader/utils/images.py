"""Image encoding helpers."""

import base64
import io

from PIL.Image import Image

PNG_MIME_TYPE = "image/png"


def encode_png(image: Image) -> bytes:
    """Encode a PIL image as PNG bytes."""
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def to_data_url(data: bytes, mime_type: str = PNG_MIME_TYPE) -> str:
    """Wrap raw bytes into a base64 data URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


def png_data_url(image: Image) -> str:
    """Encode a PIL image as a PNG data URL."""
    return to_data_url(encode_png(image), PNG_MIME_TYPE)
