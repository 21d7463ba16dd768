"""Content model and front matter parsing for inkpress.

This module reads Markdown source files and splits them into structured
metadata and Markdown body text.

Key classes:
- PageMetadata: Recognized front matter fields plus pass-through extras.
- Document: An input file with its parsed metadata and body.
- Page: A rendered HTML page ready to be written to the output tree.
- FrontMatterError: Raised when a front matter block cannot be parsed.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

import yaml

FRONTMATTER_RE = re.compile(
    r"\A---[ \t]*\r?\n(.*?)(?:\r?\n)?^---[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)


class FrontMatterError(ValueError):
    """Front matter block is present but is not a valid YAML mapping."""


@dataclass(frozen=True)
class PageMetadata:
    """Front matter of a document.

    Recognized keys keep their raw YAML value so that consumers can decide
    how to treat unexpected types (a numeric title, a string for tags).

    Attributes:
        title: Page title.
        date: Publication date (a date, datetime or string).
        description: Short summary of the page.
        author: Author name.
        tags: List of tags.
        extra: Every other front matter key, preserved unchanged.
    """

    title: Any = None
    date: Any = None
    description: Any = None
    author: Any = None
    tags: Any = None
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, data: dict[str, Any]) -> PageMetadata:
        known = {f.name for f in fields(cls)} - {"extra"}
        recognized = {key: value for key, value in data.items() if key in known}
        extra = {key: value for key, value in data.items() if key not in known}
        return cls(**recognized, extra=extra)

    def to_dict(self) -> dict[str, Any]:
        """Return the metadata as a flat mapping, omitting unset fields."""
        result = {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.name != "extra" and getattr(self, f.name) is not None
        }
        result.update(self.extra)
        return result


@dataclass(frozen=True)
class Document:
    """A Markdown source file split into metadata and body.

    Attributes:
        path: Path to the source file.
        raw: Full text of the file.
        metadata: Parsed front matter.
        body: Markdown text following the front matter block.
    """

    path: Path
    raw: str
    metadata: PageMetadata
    body: str


@dataclass(frozen=True)
class Page:
    """A rendered page derived from exactly one Document.

    Attributes:
        source: Path to the Markdown source file.
        output_path: Path the HTML document is written to.
        assets_path: Relative prefix from the page to the assets directory.
        html: Complete rendered HTML document.
        metadata: Front matter of the source document.
    """

    source: Path
    output_path: Path
    assets_path: str
    html: str
    metadata: PageMetadata


def extract_frontmatter(text: str) -> tuple[dict[str, Any], str]:
    """Extract YAML front matter from content.

    The block must start on the first line and is delimited by ``---``
    lines. Text without a block is returned unchanged.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (front matter mapping, remaining content).

    Raises:
        FrontMatterError: If the block is not valid YAML or its top level
            is not a mapping.
    """
    match = FRONTMATTER_RE.match(text)
    if not match:
        return {}, text
    try:
        data = yaml.safe_load(match.group(1))
    except yaml.YAMLError as exc:
        raise FrontMatterError(f"Invalid front matter: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return data, text[match.end() :]


def parse_document(path: Path, text: str) -> Document:
    """Build a Document from already loaded text.

    Args:
        path: Path the text was read from.
        text: Raw file content.

    Returns:
        Document with parsed metadata and body.
    """
    data, body = extract_frontmatter(text)
    return Document(
        path=path,
        raw=text,
        metadata=PageMetadata.from_mapping({str(k): v for k, v in data.items()}),
        body=body,
    )


def read_document(path: Path) -> Document:
    """Read a UTF-8 Markdown file and parse its front matter.

    A leading byte-order mark is dropped so the front matter still matches.
    """
    return parse_document(path, Path(path).read_text(encoding="utf-8-sig"))
