"""
Custom Exceptions

This module defines the exception hierarchy for the clip service.

Categories:
- Validation errors: raised while constructing field values, never reach storage
- NotFoundError: no row for the given shortcode
- PermissionDeniedError: clip is password protected and the attempt did not match
- DatabaseError: any other storage failure (details are kept off the message)

The HTTP layer only needs to distinguish NotFoundError, PermissionDeniedError
and "everything else".
"""


class ClipbinException(Exception):
    """Base exception for the clip service."""
    pass


class ClipValidationError(ClipbinException):
    """Raised when a raw input value fails field validation."""

    field = "value"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid {self.field}: {reason}")


class InvalidContentError(ClipValidationError):
    field = "content"


class InvalidTitleError(ClipValidationError):
    field = "title"


class InvalidExpirationError(ClipValidationError):
    field = "expiration"


class InvalidPasswordError(ClipValidationError):
    field = "password"


class InvalidShortCodeError(ClipValidationError):
    field = "shortcode"


class InvalidApiKeyError(ClipValidationError):
    field = "api key"


class NotFoundError(ClipbinException):
    """Raised when a clip is not found in the database."""

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Clip '{shortcode}' not found")


class PermissionDeniedError(ClipbinException):
    """Raised when a protected clip is requested without the right password."""

    def __init__(self, shortcode: str):
        self.shortcode = shortcode
        super().__init__(f"Clip '{shortcode}' is password protected")


class DatabaseError(ClipbinException):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")
