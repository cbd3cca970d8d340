"""
Media helpers for the gateway.

'detect_image_mime_type' decides whether a byte buffer is an image by letting
Pillow parse its header, which is stricter than trusting a client-supplied
content type or file extension. 'GatewayPart' is the typed input of
'AIGateway.process_multimodal'.
"""

import io
from typing import Literal

from PIL import Image
from pydantic import BaseModel


def detect_image_mime_type(data: bytes) -> str | None:
    """Return the MIME type of 'data' if it decodes as an image, else None."""
    if not data:
        return None
    try:
        with Image.open(io.BytesIO(data)) as image:
            image_format = image.format
            image.verify()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        return None
    if image_format is None:
        return None
    return Image.MIME.get(image_format, f"image/{image_format.lower()}")


class GatewayPart(BaseModel):
    """
    One ordered input of a multi-modal request.

    Text parts carry 'text'; image and audio parts carry raw bytes in 'data'.
    """

    type: Literal["text", "image", "audio"]
    text: str | None = None
    data: bytes | None = None
    mime_type: str | None = None
