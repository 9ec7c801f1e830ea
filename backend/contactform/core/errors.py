"""Error Hierarchy - typed, categorized exceptions for every request failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are the client's to fix; storage errors (500-level) are critical
    - to_response() produces the REST envelope {"error": <message>, "code": <code>}
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with ContactFormError base: one FastAPI handler catches all
    - from_descriptor() turns a core check result into the matching error type
"""

from enum import Enum


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    REQUEST = "request"
    ORIGIN = "origin"
    VALIDATION = "validation"
    RATE_LIMIT = "rate_limit"
    DATABASE = "database"
    INTERNAL = "internal"


class ContactFormError(Exception):
    """Base exception for all contact form errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {"error": self.message, "code": self.code}

    def response_headers(self) -> dict[str, str] | None:
        return None


# ─── Request Errors (400-level) ─────────────────────────────────

class HeaderDecodeError(ContactFormError):
    """Header present but its bytes are not valid text."""
    def __init__(self, header: str):
        super().__init__(
            f"Invalid {header} header", "HEADER_INVALID", ErrorCategory.REQUEST,
            ErrorSeverity.WARNING, 400,
        )
        self.header = header


class HeaderMissingError(ContactFormError):
    """Mandatory header absent."""
    def __init__(self, header: str):
        super().__init__(
            f"Missing {header} header", "HEADER_MISSING", ErrorCategory.REQUEST,
            ErrorSeverity.WARNING, 400,
        )
        self.header = header


class OriginPolicyError(ContactFormError):
    """Header present but does not contain the allowed domain."""
    def __init__(self, header: str):
        super().__init__(
            "Access denied", "ORIGIN_FORBIDDEN", ErrorCategory.ORIGIN,
            ErrorSeverity.WARNING, 403,
        )
        self.header = header


class FormValidationError(ContactFormError):
    """One of the ordered form rules failed."""
    def __init__(self, message: str):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.INFO, 400,
        )


class RateLimitExceededError(ContactFormError):
    """Client exhausted its token bucket."""
    def __init__(self, retry_after_seconds: int):
        super().__init__(
            "Too many requests", "RATE_LIMITED", ErrorCategory.RATE_LIMIT,
            ErrorSeverity.WARNING, 429,
        )
        self.retry_after_seconds = retry_after_seconds

    def response_headers(self) -> dict[str, str] | None:
        return {"Retry-After": str(self.retry_after_seconds)}


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(ContactFormError):
    """Insert or schema operation failed. Detail stays in the server log."""
    def __init__(self, operation: str):
        super().__init__(
            "Failed to store contact form", "STORAGE_ERROR",
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, 500,
        )
        self.operation = operation


_DESCRIPTOR_ERRORS = {
    "HEADER_INVALID": lambda d: HeaderDecodeError(d["header"]),
    "HEADER_MISSING": lambda d: HeaderMissingError(d["header"]),
    "ORIGIN_FORBIDDEN": lambda d: OriginPolicyError(d["header"]),
    "VALIDATION_ERROR": lambda d: FormValidationError(d["message"]),
}


def from_descriptor(descriptor: dict) -> ContactFormError:
    """Map a core error descriptor ({"error_code", "message", ...}) to its exception."""
    return _DESCRIPTOR_ERRORS[descriptor["error_code"]](descriptor)
