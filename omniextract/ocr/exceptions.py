from omniextract.processor.exceptions import ProcessorError


class ExtractionError(ProcessorError):
    """Raised when the OCR service fails or returns an unusable response."""


class ExtractionNetworkError(ExtractionError):
    """Raised when the OCR provider call fails due to network/infrastructure issues."""
