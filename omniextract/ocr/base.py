from abc import ABC, abstractmethod


class BaseTextExtractor(ABC):
    """Contract for all OCR text extraction adapters."""

    @abstractmethod
    def extract(self, payload: str) -> str:
        """Return all text detected in an encoded image.

        Args:
            payload: Base64 image, optionally prefixed with a data URI header.

        Returns:
            The unstructured text, or an empty string if nothing was detected.

        Raises:
            ExtractionError: on any service failure.
        """
