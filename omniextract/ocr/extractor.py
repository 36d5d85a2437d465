"""OCR text extractor backed by a vision-capable AI provider."""

import re
from pathlib import Path

from omniextract.logging.logger import Log
from omniextract.ocr.base import BaseTextExtractor
from omniextract.ocr.client_base import BaseVisionClient
from omniextract.ocr.prompt_loader import load_instruction

_DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,")


def split_data_uri(payload: str, default_mime: str = "image/jpeg") -> tuple[str, str]:
    """Strip a ``data:<mime>;base64,`` header, returning (mime_type, base64_data)."""
    match = _DATA_URI_RE.match(payload)
    if match is None:
        return default_mime, payload
    return match.group("mime"), payload[match.end():]


class TextExtractor(BaseTextExtractor):
    """Sends encoded images to a vision client and unwraps the returned text."""

    def __init__(
        self,
        *,
        client: BaseVisionClient,
        model: str,
        instruction_path: Path | None = None,
    ) -> None:
        self._client = client
        self._model = model
        self._instruction = load_instruction(instruction_path)

    def extract(self, payload: str) -> str:
        mime_type, image_base64 = split_data_uri(payload)
        Log.debug(f"Sending {len(image_base64)} base64 chars ({mime_type}) to OCR model {self._model}")
        text = self._client.create_vision_completion(
            model=self._model,
            instruction=self._instruction,
            image_base64=image_base64,
            mime_type=mime_type,
        )
        return text or ""
