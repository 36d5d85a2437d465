class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class InvalidStatusTransitionError(ProcessorError):
    """Raised when a queue item is moved to a status it cannot reach."""
