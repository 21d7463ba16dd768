"""Syntax highlighting for fenced code blocks.

Highlighting happens at build time with Pygments. The chosen theme is held
by a :class:`CodeHighlighter` value that callers pass to the Markdown
renderer, so every page of a build shares one theme without any global
renderer state.

Key functions:
- select_theme: Resolve a theme name, falling back to "default".
- available_themes: List the built-in theme names.
- theme_css_resource: Resource path of the code stylesheet for a theme.
"""

from __future__ import annotations

import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .html_utils import escape_html
from .themes import DEFAULT_THEME, THEMES, Theme, get_theme

logger = logging.getLogger(__name__)


def available_themes() -> list[str]:
    """Return the names of all built-in themes."""
    return list(THEMES)


def select_theme(name: str) -> Theme:
    """Resolve a theme name to a built-in Theme.

    Unknown names are not an error: a warning is logged and the default
    theme is returned.

    Args:
        name: Requested theme name.

    Returns:
        The matching Theme, or the default theme.
    """
    theme = get_theme(name)
    if theme is None:
        logger.warning(
            'Theme "%s" not available. Using "%s" theme.', name, DEFAULT_THEME
        )
        theme = THEMES[DEFAULT_THEME]
    return theme


def theme_css_resource(name: str) -> str:
    """Return the resource path of the code stylesheet for a theme.

    Args:
        name: Built-in theme name.

    Returns:
        ``themes/prism.css`` for the default theme, otherwise
        ``themes/prism-<name>.css``.
    """
    if name == DEFAULT_THEME:
        return "themes/prism.css"
    return f"themes/prism-{name}.css"


class CodeHighlighter:
    """Renders fenced code blocks for one theme.

    Attributes:
        theme: The active theme for the build.
    """

    def __init__(self, theme: Theme):
        self.theme = theme
        self._formatter = HtmlFormatter(nowrap=True)

    @classmethod
    def for_theme(cls, name: str) -> CodeHighlighter:
        """Create a highlighter for a theme name, resolving unknown names."""
        return cls(select_theme(name))

    def render_code_block(self, source: str, language: str | None = None) -> str:
        """Render a code block as HTML.

        Args:
            source: The code content.
            language: Language identifier (e.g., 'python', 'javascript').

        Returns:
            Highlighted markup in a language-tagged container when a lexer
            exists for the language, otherwise the escaped source in a
            plain ``<pre><code>`` container.
        """
        lexer = self._find_lexer(language)
        if lexer is None:
            return f"<pre><code>{escape_html(source)}</code></pre>\n"
        highlighted = highlight(source, lexer, self._formatter)
        lang = escape_html(language)
        return (
            f'<pre class="language-{lang}">'
            f'<code class="language-{lang}">{highlighted}</code></pre>\n'
        )

    def _find_lexer(self, language: str | None):
        if not language:
            return None
        try:
            return get_lexer_by_name(language)
        except ClassNotFound:
            logger.debug("No lexer for language %r; rendering plain code", language)
            return None
