"""Classification of image URLs against the trusted CDN allow-list."""

from urllib.parse import urlsplit

CDN_HOSTS = ("mmbiz.qpic.cn", "mmbiz.qlogo.cn")


def is_harvestable(url: str, allowed_hosts: tuple[str, ...] = CDN_HOSTS) -> bool:
    """Check whether a URL is served from an allow-listed CDN host.

    The host must equal an allowed host or be a subdomain of one. URLs
    without an http(s) scheme, including protocol-relative ones, are
    rejected. Never raises.

    Args:
        url: Candidate URL
        allowed_hosts: Trusted CDN hostnames

    Returns:
        True if the URL may be harvested

    Examples:
        >>> is_harvestable("https://wx1.mmbiz.qpic.cn/mmbiz_png/a/0?wx_fmt=png")
        True
        >>> is_harvestable("https://fake-mmbiz.qpic.cn.evil.com/a.jpg")
        False
        >>> is_harvestable("//mmbiz.qpic.cn/a.jpg")
        False
    """
    if not url:
        return False

    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError:
        return False

    if parts.scheme not in ("http", "https") or not hostname:
        return False

    return any(
        hostname == host or hostname.endswith(f".{host}") for host in allowed_hosts
    )
