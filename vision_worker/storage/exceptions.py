class StorageError(Exception):
    """Raised when a bucket cannot be listed or an object cannot be written."""
