"""Rewriting of remote resource references to local copies."""

import html


def rewrite_document(body: str, mapping: dict[str, str]) -> str:
    """Replace every occurrence of each mapped URL with its local path.

    Entries are applied longest URL first, so a URL that is a prefix of
    another mapped URL cannot be substituted inside the longer one. Both
    the literal URL and its ``&amp;``-escaped form are replaced, since
    resource URLs are collected from decoded attribute values.

    Args:
        body: Document HTML
        mapping: Original URL -> local relative path

    Returns:
        The rewritten document

    Examples:
        >>> rewrite_document('<img src="https://a/x.jpg">', {"https://a/x.jpg": "x.jpg"})
        '<img src="x.jpg">'
    """
    replacements: dict[str, str] = {}
    for original, local in mapping.items():
        if not original:
            continue
        replacements[original] = local
        escaped = html.escape(original, quote=False)
        if escaped != original:
            replacements.setdefault(escaped, local)

    result = body
    for original in sorted(replacements, key=len, reverse=True):
        result = result.replace(original, replacements[original])
    return result
