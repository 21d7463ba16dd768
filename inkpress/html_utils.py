"""HTML utility functions for inkpress.

This module provides the HTML escaping used by the page template and by
the code highlighter when a block falls back to plain text.

Functions:
    escape_html: Escape special HTML characters in a string.
"""

from __future__ import annotations

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#39;",
}


def escape_html(text: str) -> str:
    """Escape special HTML characters in a string.

    Converts the following characters to their HTML entity equivalents:
    - & becomes &amp;
    - < becomes &lt;
    - > becomes &gt;
    - " becomes &quot;
    - ' becomes &#39;

    Args:
        text: The string to escape.

    Returns:
        The escaped string, safe for text nodes and quoted attributes.

    Examples:
        >>> escape_html('<script>alert("XSS")</script>')
        '&lt;script&gt;alert(&quot;XSS&quot;)&lt;/script&gt;'

        >>> escape_html("Tom & Jerry's")
        'Tom &amp; Jerry&#39;s'
    """
    return "".join(_HTML_ESCAPES.get(char, char) for char in text)
