"""Markdown rendering for inkpress.

Markdown bodies are converted to HTML fragments with mistune. Fenced code
blocks are handed to the :class:`~inkpress.highlighting.CodeHighlighter`
passed in by the caller.

Key classes:
- MarkdownRenderer: Renders Markdown to HTML with syntax highlighting.
"""

from __future__ import annotations

import mistune

from .highlighting import CodeHighlighter

MARKDOWN_PLUGINS = ["strikethrough", "footnotes", "table", "url"]


class _HighlightRenderer(mistune.HTMLRenderer):
    """mistune HTML renderer that delegates code blocks to a highlighter.

    Attributes:
        highlighter: Highlighter used for fenced code blocks.
    """

    def __init__(self, highlighter: CodeHighlighter):
        # Raw HTML in Markdown passes through unescaped.
        super().__init__(escape=False)
        self.highlighter = highlighter

    def block_code(self, code: str, info: str | None = None) -> str:
        """Render a code block through the highlighter.

        Args:
            code: The code content.
            info: Fence info string; its first word is the language.

        Returns:
            HTML string with highlighted code.
        """
        language = info.split(None, 1)[0] if info and info.strip() else None
        return self.highlighter.render_code_block(code, language)


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    The renderer holds no per-build state; the highlighter is supplied on
    every call.
    """

    def render(self, content: str, highlighter: CodeHighlighter) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content.
            highlighter: Highlighter for fenced code blocks.

        Returns:
            Rendered HTML fragment.
        """
        markdown = mistune.create_markdown(
            renderer=_HighlightRenderer(highlighter), plugins=MARKDOWN_PLUGINS
        )
        return markdown(content)
