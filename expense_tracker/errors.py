"""Exception taxonomy surfaced by the transaction store."""

from __future__ import annotations


class TransactionError(RuntimeError):
    """Base class for transaction store failures."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TransactionError):
    """Raised when input is missing or malformed."""

    status_code = 400


class NotFoundError(TransactionError):
    """Raised when no transaction matches the requested id."""

    status_code = 404


class StorageError(TransactionError):
    """Raised when the backing store fails to read or write."""

    status_code = 500


__all__ = ["NotFoundError", "StorageError", "TransactionError", "ValidationError"]
