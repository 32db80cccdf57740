"""
Custom exceptions for the storefront gateway.
"""


class GatewayError(Exception):
    """Base exception for all gateway errors."""

    def __init__(self, message: str, details: str | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class NetworkError(GatewayError):
    """Raised when a request to the backend cannot be completed."""

    def __init__(self, url: str, status_code: int | None = None, details: str | None = None):
        message = f"Backend request failed: {url}"
        if status_code:
            message += f" (status {status_code})"
        super().__init__(message, details=details)
        self.url = url
        self.status_code = status_code


class BackendError(NetworkError):
    """Raised when the backend answers with an error status or an unreadable body."""


class NotFoundError(BackendError):
    """Raised when the backend reports a resource as missing."""

    def __init__(self, url: str, details: str | None = None):
        super().__init__(url, 404, details=details)


class RateLimitError(BackendError):
    """Raised when the backend rate limit is exceeded."""

    def __init__(self, url: str, retry_after: int | None = None):
        details = None
        if retry_after:
            details = f"Retry allowed in {retry_after} seconds."
        super().__init__(url, 429, details=details)
        self.retry_after = retry_after


class AuthenticationError(GatewayError):
    """Raised when a call is rejected as unauthenticated.

    Covers a 401 from the backend, a failed admin login, and an
    admin-only operation attempted without a logged-in session.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        url: str | None = None,
        backend_message: str | None = None,
    ):
        super().__init__(message, details=url)
        self.url = url
        self.backend_message = backend_message


class ValidationError(GatewayError):
    """Raised when input validation fails."""

    def __init__(self, field: str, value: str, reason: str):
        super().__init__(
            f"Validation failed for {field}",
            details=f"Value '{value}' is invalid: {reason}",
        )
        self.field = field
        self.value = value
        self.reason = reason


class ConfigurationError(GatewayError):
    """Raised when gateway settings are missing or malformed."""

    def __init__(self, setting: str, details: str | None = None):
        super().__init__(f"Invalid configuration for {setting}", details=details)
        self.setting = setting
