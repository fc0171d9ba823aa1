"""Local filename derivation for harvested resources and documents."""

import hashlib
import re
from urllib.parse import quote

DEFAULT_EXTENSION = "jpg"
MAX_FILENAME_LENGTH = 200

MIME_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/svg+xml": "svg",
    "image/bmp": "bmp",
}

IMAGE_EXTENSIONS = frozenset(["jpg", "jpeg", "png", "gif", "webp", "svg", "bmp"])

WX_FMT_PATTERN = re.compile(r"wx_fmt=(\w+)")
PATH_EXTENSION_PATTERN = re.compile(r"\.(\w{3,4})(?:\?|$)")

# Characters encodeURIComponent leaves unescaped
FILENAME_SAFE_CHARS = "-_.!~*'()"


def hash16(url: str) -> str:
    """Return a stable 16-hex-character digest of a URL."""
    return hashlib.md5(url.encode("utf-8")).hexdigest()[:16]


def guess_extension(content_type: str | None = None, url: str | None = None) -> str:
    """Guess a file extension for a resource.

    Priority: a known Content-Type, then a ``wx_fmt=`` hint in the URL,
    then a whitelisted image extension at the end of the URL path, then
    ``jpg``.

    Args:
        content_type: Content-Type header value, if any
        url: Resource URL, if any

    Returns:
        Extension without the leading dot

    Examples:
        >>> guess_extension("image/png; charset=utf-8")
        'png'
        >>> guess_extension(None, "https://mmbiz.qpic.cn/a/0?wx_fmt=webp")
        'webp'
        >>> guess_extension("image/jpeg", "https://example.com/a.png")
        'jpg'
    """
    if content_type:
        lowered = content_type.lower()
        for mime, extension in MIME_EXTENSIONS.items():
            if mime in lowered:
                return extension

    if url:
        match = WX_FMT_PATTERN.search(url)
        if match:
            return match.group(1)

        match = PATH_EXTENSION_PATTERN.search(url)
        if match and match.group(1).lower() in IMAGE_EXTENSIONS:
            return match.group(1).lower()

    return DEFAULT_EXTENSION


def allocate_resource_name(url: str, content_type: str | None = None) -> str:
    """Derive the local filename for a resource URL.

    Args:
        url: Resource URL
        content_type: Content-Type of the fetched resource, if known

    Returns:
        Filename of the form ``{hash16}.{ext}``
    """
    return f"{hash16(url)}.{guess_extension(content_type, url)}"


def safe_document_name(title: str, max_length: int = MAX_FILENAME_LENGTH) -> str:
    """Derive a filesystem-safe document filename stem from a title.

    Reserved characters are percent-encoded, encoded spaces become
    underscores, and the result is truncated to ``max_length`` without
    leaving a dangling partial escape.

    Examples:
        >>> safe_document_name("Hello World/2026")
        'Hello_World%2F2026'
    """
    encoded = quote(title, safe=FILENAME_SAFE_CHARS).replace("%20", "_")
    truncated = encoded[:max_length]
    return re.sub(r"%[0-9A-Fa-f]?$", "", truncated)
