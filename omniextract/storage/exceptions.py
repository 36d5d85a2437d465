class StorageError(Exception):
    """Raised when persisted state cannot be read or written."""
