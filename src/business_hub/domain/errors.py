"""Error types raised by the dashboard client."""


class BusinessHubError(Exception):
    """Base class for dashboard client errors."""


class ApiError(BusinessHubError):
    """Raised when a call to the remote API fails."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or "API request failed")
        self.message = message


class ApiTransportError(ApiError):
    """The request never produced an HTTP response."""


class ApiRequestError(ApiError):
    """The API answered with an error status."""

    def __init__(self, status_code: int, message: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ApiRejectedError(ApiError):
    """The API answered with an envelope whose success flag is false."""


class SessionExpiredError(BusinessHubError):
    """The API rejected the stored credentials.

    Not an :class:`ApiError`, so it passes through page-level error handling
    to the hosting application.
    """

    def __init__(self) -> None:
        super().__init__("Session expired")


class ValidationError(BusinessHubError):
    """Raised when a form fails client-side checks."""


class OrderValidationError(ValidationError):
    """Raised when an order draft cannot be submitted."""
