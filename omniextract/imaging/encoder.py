"""Pillow-based image encoder with an optional OCR enhancement pass.

Enhancement flow:
1. Grayscale via ITU-R 601-2 luma (0.299 R + 0.587 G + 0.114 B).
2. Linear contrast stretch around mid-gray (128).
"""

import base64
import io

from PIL import Image, UnidentifiedImageError

from omniextract.imaging.base import BaseImageEncoder
from omniextract.imaging.exceptions import EncodingError
from omniextract.logging.logger import Log
from omniextract.processor.models import ImageSource

_MID_GRAY = 128
_JPEG_QUALITY = 90


def contrast_factor(contrast: float) -> float:
    """Classic contrast-correction factor for a contrast level in [-255, 255]."""
    return (259 * (contrast + 255)) / (255 * (259 - contrast))


def enhance(image: Image.Image, contrast: float) -> Image.Image:
    """Return a grayscale, contrast-stretched copy of *image*."""
    factor = contrast_factor(contrast)
    gray = image.convert("L")
    return gray.point(
        lambda v: max(0, min(255, round(factor * (v - _MID_GRAY) + _MID_GRAY)))
    )


class ImageEncoder(BaseImageEncoder):
    """Encodes images as base64 JPEG, optionally enhanced for OCR."""

    def __init__(self, *, enhance_images: bool = True, contrast: float = 1.2) -> None:
        self._enhance = enhance_images
        self._contrast = contrast

    def encode(self, source: ImageSource) -> str:
        image = self._open(source)
        try:
            if self._enhance:
                prepared = enhance(image, self._contrast)
            else:
                prepared = image.convert("RGB")
            buf = io.BytesIO()
            prepared.save(buf, format="JPEG", quality=_JPEG_QUALITY)
        except (OSError, ValueError) as exc:
            raise EncodingError(f"Failed to encode image: {exc}") from exc
        finally:
            image.close()

        payload = base64.b64encode(buf.getvalue()).decode("ascii")
        Log.debug(f"Encoded image to {len(payload)} base64 chars (enhanced={self._enhance})")
        return payload

    @staticmethod
    def _open(source: ImageSource) -> Image.Image:
        fp = io.BytesIO(source) if isinstance(source, bytes) else source
        try:
            image = Image.open(fp)
            image.load()
        except FileNotFoundError as exc:
            raise EncodingError(f"Image not found: {source}") from exc
        except Image.DecompressionBombError as exc:
            raise EncodingError(f"Image too large to decode: {exc}") from exc
        except (UnidentifiedImageError, OSError, SyntaxError, ValueError) as exc:
            raise EncodingError(f"Cannot decode image: {exc}") from exc
        return image
