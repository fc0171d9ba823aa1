"""Client for fetching public article pages and their CDN images."""

import logging

import httpx

from .client import Client
from .exceptions import SessionExpiredError

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)
DEFAULT_ACCEPT_LANGUAGE = "zh-CN,zh;q=0.9,en;q=0.8"
DOCUMENT_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

# base_resp.ret values meaning "invalid session"
DEFAULT_SESSION_EXPIRED_CODES = (200003,)


class ArticleClient(Client):
    """Client for article pages and the images they reference.

    Sends a desktop browser user agent with every request. JSON responses
    are inspected for the upstream's session-invalid return code, which is
    surfaced as SessionExpiredError rather than an ordinary failure.

    Additional config keys:
        user_agent: User-Agent header (default: desktop Chrome)
        accept_language: Accept-Language header for documents
        session_expired_codes: base_resp.ret codes meaning session expiry

    Example:
        async with ArticleClient({"retry_delay": 1}) as client:
            html = await client.fetch("https://mp.weixin.qq.com/s/abc")
    """

    @property
    def user_agent(self) -> str:
        return str(self._config.get("user_agent", DEFAULT_USER_AGENT))

    @property
    def accept_language(self) -> str:
        return str(self._config.get("accept_language", DEFAULT_ACCEPT_LANGUAGE))

    @property
    def session_expired_codes(self) -> frozenset[int]:
        codes = self._config.get("session_expired_codes", DEFAULT_SESSION_EXPIRED_CODES)
        return frozenset(int(code) for code in codes)

    async def fetch(self, url: str) -> str:
        """Fetch an article document.

        Args:
            url: Absolute article URL

        Returns:
            The decoded document body

        Raises:
            SessionExpiredError: If the upstream reports an invalid session
            HttpStatusError: If the upstream returns a non-2xx response
            NetworkError: If all attempts fail at the transport level
        """
        response = await self.get(
            url,
            headers={
                "User-Agent": self.user_agent,
                "Accept": DOCUMENT_ACCEPT,
                "Accept-Language": self.accept_language,
            },
        )
        self._check_session(response)
        return response.text

    async def fetch_resource(self, url: str) -> tuple[bytes, str | None]:
        """Fetch a binary resource such as an image.

        Args:
            url: Absolute resource URL

        Returns:
            Tuple of (content bytes, Content-Type header or None)
        """
        response = await self.get(url, headers={"User-Agent": self.user_agent})
        return response.content, response.headers.get("content-type")

    def _check_session(self, response: httpx.Response) -> None:
        """Raise SessionExpiredError if a JSON body carries a session-invalid code."""
        content_type = response.headers.get("content-type", "")
        if "json" not in content_type:
            return

        try:
            data = response.json()
        except ValueError:
            return

        base_resp = data.get("base_resp") if isinstance(data, dict) else None
        if not isinstance(base_resp, dict):
            return

        if base_resp.get("ret") in self.session_expired_codes:
            logger.warning(f"Upstream reported an expired session for {response.url}")
            raise SessionExpiredError()
