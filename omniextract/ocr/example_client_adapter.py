"""Example OCR client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseVisionClient and register the provider in TextExtractorFactory.
"""

from typing import ClassVar

from omniextract.ocr.client_base import BaseVisionClient


class ExampleVisionClientAdapter(BaseVisionClient):
    """Example adapter that returns fixed text for every image.

    No network calls. Useful for local development, dry runs and tests.
    """

    DEFAULT_TEXT: ClassVar[str] = "Call us: +91 98765 43210"

    def __init__(self, text: str | None = None) -> None:
        self._text = self.DEFAULT_TEXT if text is None else text

    def create_vision_completion(
        self,
        *,
        model: str,
        instruction: str,
        image_base64: str,
        mime_type: str,
    ) -> str | None:
        _ = model, instruction, image_base64, mime_type
        return self._text
