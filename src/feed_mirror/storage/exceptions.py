"""Custom exceptions for storage collaborators."""

QUOTA_EXCEEDED_REASON = "storage_quota_exceeded"


class StorageError(Exception):
    """Base exception for all storage errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class QuotaExceededError(StorageError):
    """Raised when saving more data would exceed an account's storage quota."""

    def __init__(self, message: str = QUOTA_EXCEEDED_REASON):
        super().__init__(message)
