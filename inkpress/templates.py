"""Page template rendering for inkpress.

This module uses Jinja2 to wrap a rendered Markdown body and its front
matter into a complete HTML document.

Key class:
- PageTemplate: Renders the page layout with escaped metadata.

Key function:
- format_date: Format a front matter date as a locale short date.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup

from .content import PageMetadata
from .html_utils import escape_html

__all__ = ["DEFAULT_FOOTER", "INVALID_DATE", "PageTemplate", "format_date"]

DEFAULT_TITLE = "Untitled"
DEFAULT_FOOTER = "Built with inkpress"
INVALID_DATE = "Invalid Date"

_DATE_FORMATS = (
    "%Y/%m/%d",
    "%m/%d/%Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%d %B %Y",
    "%d %b %Y",
)


def _escape_filter(value: Any) -> Markup:
    return Markup(escape_html(str(value)))


def _parse_date(text: str) -> datetime | None:
    text = text.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        pass
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue
    return None


def format_date(value: Any) -> str:
    """Format a front matter date value as a locale-aware short date.

    YAML turns unquoted ISO dates into ``date`` objects; quoted dates arrive
    as strings and are parsed here.

    Args:
        value: Raw ``date`` value from the front matter.

    Returns:
        The formatted date, an empty string for missing values, or
        ``Invalid Date`` when the value cannot be parsed.
    """
    if not value:
        return ""
    if isinstance(value, (date, datetime)):
        parsed = value
    else:
        parsed = _parse_date(str(value))
    if parsed is None:
        return INVALID_DATE
    return parsed.strftime("%x")


def _string_or_empty(value: Any) -> str:
    return value if isinstance(value, str) else ""


class PageTemplate:
    """Renders complete HTML pages from rendered bodies and metadata.

    Attributes:
        env: Jinja2 environment loading templates from the package.
        footer: Text shown in the page footer.
    """

    template_name = "page.html.jinja"

    def __init__(self, footer: str = DEFAULT_FOOTER):
        self.footer = footer
        self.env = Environment(
            loader=PackageLoader("inkpress", "templates"),
            autoescape=select_autoescape(["html", "jinja"]),
            keep_trailing_newline=True,
        )
        self.env.filters["escape_html"] = _escape_filter

    def render(
        self,
        body: str,
        metadata: PageMetadata,
        assets_path: str = "./assets",
    ) -> str:
        """Render a full HTML document.

        Args:
            body: Rendered HTML body; inserted as-is.
            metadata: Front matter of the page.
            assets_path: Relative prefix to the assets directory.

        Returns:
            The complete HTML document.
        """
        title = metadata.title if isinstance(metadata.title, str) else DEFAULT_TITLE
        formatted_date = format_date(metadata.date)
        template = self.env.get_template(self.template_name)
        return template.render(
            title=title,
            description=_string_or_empty(metadata.description),
            author=_string_or_empty(metadata.author),
            date=formatted_date,
            metadata_items=self._metadata_items(metadata, formatted_date),
            assets_path=assets_path,
            body=Markup(body),
            footer=self.footer,
        )

    def _metadata_items(
        self, metadata: PageMetadata, formatted_date: str
    ) -> list[dict[str, Any]]:
        """Build the metadata panel entries in display order.

        Each entry is only present when its value has the expected type.
        """
        items: list[dict[str, Any]] = []
        if metadata.description and isinstance(metadata.description, str):
            items.append({"label": "Description", "value": metadata.description})
        if formatted_date:
            items.append({"label": "Date", "value": formatted_date})
        if metadata.author and isinstance(metadata.author, str):
            items.append({"label": "Author", "value": metadata.author})
        if isinstance(metadata.tags, list) and metadata.tags:
            items.append({"label": "Tags", "tags": [str(tag) for tag in metadata.tags]})
        return items
