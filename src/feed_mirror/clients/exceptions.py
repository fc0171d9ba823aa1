"""Custom exceptions for network clients."""

SESSION_EXPIRED_REASON = "session_expired"


class ClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


class NetworkError(ClientError):
    """Raised when a transport failure persists after all retry attempts."""

    pass


class HttpStatusError(ClientError):
    """Raised when the upstream returns a non-2xx response."""

    def __init__(self, message: str, status_code: int, *args, **kwargs):
        self.status_code = status_code
        super().__init__(message, *args, **kwargs)


class RateLimitError(HttpStatusError):
    """Raised when the upstream returns a 429 rate limit response."""

    def __init__(self, message: str = "Rate limit exceeded"):
        super().__init__(message, status_code=429)


class NotFoundError(HttpStatusError):
    """Raised when the upstream returns a 404 not found response."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class SessionExpiredError(ClientError):
    """Raised when the upstream reports that the caller's session is no longer valid."""

    def __init__(self, message: str = SESSION_EXPIRED_REASON):
        super().__init__(message)


def is_session_expired(error: Exception) -> bool:
    """Return True if an error signals upstream session expiry.

    Accepts the dedicated exception type as well as any error carrying the
    reserved ``session_expired`` message.
    """
    if isinstance(error, SessionExpiredError):
        return True
    return getattr(error, "message", None) == SESSION_EXPIRED_REASON
