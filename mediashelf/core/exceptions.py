"""Custom exceptions for the media shelf application."""

from typing import List


class MediaShelfError(Exception):
    """Base exception for all media shelf errors."""

    def __init__(self, message: str, details: str = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class ValidationError(MediaShelfError):
    """Raised when a record violates one or more schema rules."""

    def __init__(self, errors: List[str], category: str = None):
        super().__init__("Validation failed", details="; ".join(errors))
        self.errors = list(errors)
        self.category = category


class NotFoundError(MediaShelfError):
    """Raised when an identifier does not exist in a category."""

    def __init__(self, item_id: str, category: str = None):
        super().__init__("Item not found", details=item_id)
        self.item_id = item_id
        self.category = category


class UnauthorizedError(MediaShelfError):
    """Raised when a write request carries a missing or wrong admin key."""

    def __init__(self, message: str = "Unauthorized - Invalid or missing admin key"):
        super().__init__(message)


class MalformedPayloadError(MediaShelfError):
    """Raised when a request body is not a JSON object."""

    def __init__(self, message: str = "Invalid JSON", details: str = None):
        super().__init__(message, details)


class UnknownCategoryError(MediaShelfError):
    """Raised when a category is not one of the known kinds."""

    def __init__(self, category: str):
        super().__init__(f"Unknown data type: {category}")
        self.category = category


class StorageError(MediaShelfError):
    """Raised when reading or writing a data file fails."""

    def __init__(
        self,
        message: str,
        file_path: str = None,
        operation: str = None,
        details: str = None,
    ):
        super().__init__(message, details)
        self.file_path = file_path
        self.operation = operation
