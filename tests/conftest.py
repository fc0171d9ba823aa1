"""Pytest fixtures for feed-mirror tests."""

import httpx
import pytest

from feed_mirror.clients import ArticleClient
from feed_mirror.storage import FileBlobWriter, JsonContentStore, JsonQuotaLedger

IMG_JPEG = "https://mmbiz.qpic.cn/mmbiz_jpg/abc123/0?wx_fmt=jpeg"
IMG_PNG = "https://mmbiz.qlogo.cn/mmbiz_png/xyz789/0?wx_fmt=png"
IMG_BACKGROUND = "https://mmbiz.qpic.cn/mmbiz_jpg/bg123/0"
IMG_WEBP = "https://wx1.mmbiz.qpic.cn/mmbiz_webp/web123/0?wx_fmt=webp"
EXTERNAL_IMG = "https://example.com/image.jpg"


class FakeUpstream:
    """Routes requests to canned responses and records every request made.

    Routes map a URL to either an httpx.Response, an exception instance to
    raise, or a list of those consumed one per request.
    """

    def __init__(self, routes: dict | None = None):
        self.routes = dict(routes or {})
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        url = str(request.url)
        if url not in self.routes:
            return httpx.Response(404, request=request)

        outcome = self.routes[url]
        if isinstance(outcome, list):
            outcome = outcome.pop(0) if len(outcome) > 1 else outcome[0]
        if isinstance(outcome, Exception):
            raise outcome
        return httpx.Response(
            outcome.status_code,
            headers=outcome.headers,
            content=outcome.content,
        )

    def calls(self, url: str) -> int:
        return sum(1 for r in self.requests if str(r.url) == url)


@pytest.fixture
def sample_article_html():
    """Article page in the shape served by the upstream platform."""
    return f"""<!DOCTYPE html>
<html>
<head>
  <title></title>
  <meta property="og:title" content="OG Title" />
</head>
<body>
  <div id="js_content">
    <p>First paragraph.</p>
    <img src="https://example.com/placeholder.gif" data-src="{IMG_JPEG}">
    <img data-src="{IMG_PNG}">
    <section style="background-image: url('{IMG_BACKGROUND}');"></section>
    <img src="{IMG_WEBP}">
    <img src="{EXTERNAL_IMG}">
    <img src="{IMG_JPEG}">
  </div>
  <script>
    var msg_title = 'A Sample Article'.html(false);
    var comment_id = "2247483650";
  </script>
</body>
</html>
"""


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def http_client(upstream):
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))


@pytest.fixture
def article_client(http_client):
    return ArticleClient({"retry_delay": 0}, http_client=http_client)


@pytest.fixture
def content_store(tmp_path):
    return JsonContentStore(tmp_path)


@pytest.fixture
def quota_ledger(tmp_path):
    return JsonQuotaLedger(tmp_path / "quota.json")


@pytest.fixture
def blob_writer(tmp_path):
    return FileBlobWriter(tmp_path)
