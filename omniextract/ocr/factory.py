from typing import ClassVar

from omniextract.config.settings import Settings
from omniextract.ocr.base import BaseTextExtractor
from omniextract.ocr.example_client_adapter import ExampleVisionClientAdapter
from omniextract.ocr.extractor import TextExtractor
from omniextract.ocr.openai_client_adapter import OpenAIVisionClientAdapter


class TextExtractorFactory:
    """Creates the configured OCR text extractor."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseTextExtractor:
        """Create a configured text extractor from application settings."""
        provider = settings.ocr_provider.lower()
        if provider == "example":
            return TextExtractor(client=ExampleVisionClientAdapter(), model="example")
        client = OpenAIVisionClientAdapter(
            api_key=settings.ocr_api_key,
            timeout_seconds=settings.ocr_timeout_seconds,
            base_url=cls._resolve_base_url(provider, settings),
        )
        return TextExtractor(client=client, model=settings.ocr_model_name)

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = (settings.ocr_base_url or "").strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ValueError(
                    "ocr_base_url is required for ocr_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown OCR provider '{provider}'. Choose from: {supported}")
