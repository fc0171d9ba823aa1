"""Network clients for upstream article pages."""

from .article_client import ArticleClient
from .client import Client
from .exceptions import (
    SESSION_EXPIRED_REASON,
    ClientError,
    HttpStatusError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SessionExpiredError,
    is_session_expired,
)

__all__ = [
    "Client",
    "ArticleClient",
    "ClientError",
    "NetworkError",
    "HttpStatusError",
    "RateLimitError",
    "NotFoundError",
    "SessionExpiredError",
    "SESSION_EXPIRED_REASON",
    "is_session_expired",
]
