import httpx
import openai

from omniextract.ocr.client_base import BaseVisionClient
from omniextract.ocr.exceptions import ExtractionError, ExtractionNetworkError


class OpenAIVisionClientAdapter(BaseVisionClient):
    """OCR client adapter built on the OpenAI-compatible chat API with image input."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: float | None,
        base_url: str | None = None,
    ) -> None:
        # timeout=None disables the SDK's request timeout entirely
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )

    def create_vision_completion(
        self,
        *,
        model: str,
        instruction: str,
        image_base64: str,
        mime_type: str,
    ) -> str | None:
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=[
                    {
                        "role": "user",
                        "content": [
                            {
                                "type": "image_url",
                                "image_url": {
                                    "url": f"data:{mime_type};base64,{image_base64}",
                                },
                            },
                            {"type": "text", "text": instruction},
                        ],
                    },
                ],
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(f"OCR provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(f"OCR provider API error: {exc}") from exc

        if not response.choices:
            raise ExtractionError("OCR provider returned no choices")
        return response.choices[0].message.content
