class DomainError(Exception):
    """Base exception for business rule violations."""


class EmptyDatasetError(DomainError):
    """Raised when an export is requested with no rows to write."""


class CaptureError(DomainError):
    """Raised by a capture source that can no longer produce frames."""


class StorageError(DomainError):
    """Raised when the attendance store cannot complete a read or write."""


class TransientStorageError(StorageError):
    """Storage failure that may succeed on retry (lost connection, lock timeout)."""
