"""Title and comment-thread identifier extraction.

Title extraction is an ordered list of strategies, each a pure function
``body -> str | None``. The first strategy producing a non-blank value
wins; if none does, the title is ``"Untitled"``.
"""

import re
from collections.abc import Callable

UNTITLED = "Untitled"

MSG_TITLE_PATTERN = re.compile(r"""var\s+msg_title\s*=\s*(["'])(.*?)\1""", re.DOTALL)
OG_TITLE_PATTERN = re.compile(
    r"""og:title["']?\s+content=(["'])(.*?)\1""",
    re.IGNORECASE | re.DOTALL,
)
HTML_TITLE_PATTERN = re.compile(r"<title[^>]*>([^<]+)</title>", re.IGNORECASE)
COMMENT_ID_PATTERN = re.compile(r"""var\s+comment_id\s*=\s*(["'])([^"']+?)\1""")

TitleStrategy = Callable[[str], str | None]


def title_from_msg_title(body: str) -> str | None:
    """Title assigned to the page-embedded ``msg_title`` variable."""
    match = MSG_TITLE_PATTERN.search(body)
    return match.group(2) if match else None


def title_from_og_meta(body: str) -> str | None:
    """Title from the Open Graph ``og:title`` meta tag."""
    match = OG_TITLE_PATTERN.search(body)
    return match.group(2) if match else None


def title_from_html_title(body: str) -> str | None:
    """Title from the document's ``<title>`` element."""
    match = HTML_TITLE_PATTERN.search(body)
    return match.group(1) if match else None


TITLE_STRATEGIES: list[TitleStrategy] = [
    title_from_msg_title,
    title_from_og_meta,
    title_from_html_title,
]


def extract_title(body: str, strategies: list[TitleStrategy] | None = None) -> str:
    """Extract an article title.

    Args:
        body: Document HTML
        strategies: Ordered strategies to try (default: TITLE_STRATEGIES)

    Returns:
        The trimmed title, or "Untitled" if no strategy matched

    Examples:
        >>> extract_title('<meta property="og:title" content="Hello World" />')
        'Hello World'
        >>> extract_title("<p>no title</p>")
        'Untitled'
    """
    for strategy in strategies or TITLE_STRATEGIES:
        candidate = strategy(body or "")
        if candidate and candidate.strip():
            return candidate.strip()
    return UNTITLED


def extract_comment_id(body: str) -> str | None:
    """Extract the embedded comment-thread identifier, if present."""
    match = COMMENT_ID_PATTERN.search(body or "")
    if match is None:
        return None
    return match.group(2).strip() or None
