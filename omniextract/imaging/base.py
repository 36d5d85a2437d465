from abc import ABC, abstractmethod

from omniextract.processor.models import ImageSource


class BaseImageEncoder(ABC):
    """Contract for all image encoding adapters."""

    @abstractmethod
    def encode(self, source: ImageSource) -> str:
        """Turn an image into a text-safe payload for the OCR service.

        Args:
            source: Path to an image file or the raw image bytes.

        Returns:
            Base64-encoded image bytes, without a data-URI prefix.

        Raises:
            EncodingError: if the source cannot be read or decoded.
        """
