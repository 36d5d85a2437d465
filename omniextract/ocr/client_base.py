from abc import ABC, abstractmethod


class BaseVisionClient(ABC):
    """Contract for provider-specific OCR vision clients."""

    @abstractmethod
    def create_vision_completion(
        self,
        *,
        model: str,
        instruction: str,
        image_base64: str,
        mime_type: str,
    ) -> str | None:
        """Return the provider's text answer, or None if it produced none."""
