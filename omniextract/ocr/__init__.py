from omniextract.ocr.base import BaseTextExtractor
from omniextract.ocr.extractor import TextExtractor
from omniextract.ocr.factory import TextExtractorFactory

__all__ = ["BaseTextExtractor", "TextExtractor", "TextExtractorFactory"]
