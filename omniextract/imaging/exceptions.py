from omniextract.processor.exceptions import ProcessorError


class EncodingError(ProcessorError):
    """Raised when an image source cannot be read or decoded."""
