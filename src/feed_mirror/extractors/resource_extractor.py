"""Discovery of harvestable image URLs in article documents."""

import logging
import re

from lxml import etree, html

from .url_classifier import CDN_HOSTS, is_harvestable

logger = logging.getLogger(__name__)

LAZY_SRC_ATTRIBUTE = "data-src"

BACKGROUND_URL_PATTERN = re.compile(
    r"""url\(\s*["']?(https?://[^"')\s]+)["']?\s*\)""",
    re.IGNORECASE,
)


def extract_resource_urls(
    body: str,
    allowed_hosts: tuple[str, ...] = CDN_HOSTS,
) -> set[str]:
    """Collect the distinct harvestable image URLs referenced by a document.

    Looks at ``<img>`` elements, preferring the lazy-load ``data-src`` over
    the eager ``src`` placeholder, and at ``url(...)`` references inside
    inline ``style`` attributes. Candidates outside the CDN allow-list are
    dropped. Malformed markup yields whatever the parser recovers.

    Args:
        body: Document HTML
        allowed_hosts: Trusted CDN hostnames

    Returns:
        Set of harvestable URLs
    """
    if not body or not body.strip():
        return set()

    try:
        root = html.document_fromstring(body)
    except (etree.ParserError, ValueError) as e:
        logger.debug(f"Could not parse document for resources: {e}")
        return set()

    urls: set[str] = set()

    for img in root.iter("img"):
        lazy_src = (img.get(LAZY_SRC_ATTRIBUTE) or "").strip()
        src = (img.get("src") or "").strip()
        if lazy_src and is_harvestable(lazy_src, allowed_hosts):
            urls.add(lazy_src)
        elif src and is_harvestable(src, allowed_hosts):
            urls.add(src)

    for element in root.xpath("//*[@style]"):
        urls.update(_style_urls(element.get("style") or "", allowed_hosts))

    return urls


def _style_urls(style: str, allowed_hosts: tuple[str, ...]) -> set[str]:
    """Extract harvestable ``url(...)`` references from an inline style."""
    # Entity-quoted values survive attribute decoding when double-escaped
    style = style.replace("&quot;", '"').replace("&#39;", "'")
    return {
        match.group(1)
        for match in BACKGROUND_URL_PATTERN.finditer(style)
        if is_harvestable(match.group(1), allowed_hosts)
    }
