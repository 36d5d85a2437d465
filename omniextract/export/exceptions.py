class ExportError(Exception):
    """Base exception for export-related errors."""


class NothingToExportError(ExportError):
    """Raised when an export is requested for an empty result set."""


class ExportRecordNotFoundError(ExportError):
    """Raised when a history entry cannot be found."""
