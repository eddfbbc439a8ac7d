"""
Error types for QSL Card Manager.

Service and parser code raises these; the API layer turns them into JSON
error responses carrying the status code and error code defined here.
"""

from typing import Any, Dict, Optional


class QSLCardError(Exception):
    """Base class for all application errors."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the error for an API response body."""
        body: Dict[str, Any] = {
            "detail": self.message,
            "error_code": self.error_code,
        }
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(QSLCardError):
    """Input failed a business validation rule."""

    status_code = 400
    error_code = "validation_error"


class AuthenticationError(QSLCardError):
    """Credentials were missing or wrong."""

    status_code = 401
    error_code = "authentication_error"


class NotFoundError(QSLCardError):
    """Entity does not exist or is not visible to the caller."""

    status_code = 404
    error_code = "not_found"


class ConflictError(QSLCardError):
    """A unique value is already taken."""

    status_code = 409
    error_code = "conflict"


class ImportFormatError(QSLCardError):
    """An uploaded log file could not be imported."""

    status_code = 400
    error_code = "import_error"


class PayloadTooLargeError(QSLCardError):
    """An upload exceeded the configured size limit."""

    status_code = 413
    error_code = "payload_too_large"


class ExportError(QSLCardError):
    """A document could not be rendered."""

    status_code = 500
    error_code = "export_error"
