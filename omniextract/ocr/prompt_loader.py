from pathlib import Path

from omniextract.ocr.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_instruction(path: Path | None = None) -> str:
    """Load the OCR instruction text sent alongside every image.

    Args:
        path: Path to the instruction file.
              Defaults to the bundled ocr_instruction.txt.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "ocr_instruction.txt"
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ExtractionError(f"Failed to load OCR instruction: {exc}") from exc
