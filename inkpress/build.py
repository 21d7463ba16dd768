"""Site building functionality for inkpress.

This module contains the core logic for building a static site from a tree
of Markdown files. It discovers sources, renders every page with the chosen
theme, writes the output tree and publishes the shared assets.

Key functions:
- build_site: Main function to build the entire site.
- find_markdown_files: Lists the Markdown sources below the input directory.
- process_markdown_file: Turns one source file into a rendered Page.
- write_page: Writes a rendered Page to disk.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from .assets import AssetPublisher
from .content import FrontMatterError, Page, read_document
from .highlighting import CodeHighlighter
from .renderers import MarkdownRenderer
from .templates import DEFAULT_FOOTER, PageTemplate
from .themes import DEFAULT_THEME, Theme
from .utils import (
    assets_path_for,
    ensure_directory,
    is_markdown,
    output_path_for,
    read_directory_recursive,
)

logger = logging.getLogger(__name__)


class BuildError(Exception):
    """Error during site build with file context.

    Attributes:
        source_path: Path to the file or directory that caused the error.
        message: Human-readable error message.
        original_error: The original exception that was caught.
    """

    def __init__(
        self,
        source_path: Path,
        message: str,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.original_error = original_error
        super().__init__(f"{source_path}: {message}")


@dataclass
class BuildOptions:
    """Per-invocation build settings.

    Attributes:
        theme: Requested theme name; unknown names fall back to "default".
        watch: Whether to keep watching the input tree after the build.
        footer: Footer text for every page.
    """

    theme: str = DEFAULT_THEME
    watch: bool = False
    footer: str = DEFAULT_FOOTER


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        pages: Pages that were rendered and written successfully.
        errors: Per-file failures that were skipped.
        output_dir: Directory where the site was built.
        theme: Theme used for the build, or None when nothing was built.
    """

    pages: list[Page]
    output_dir: Path
    errors: list[BuildError] = field(default_factory=list)
    theme: Theme | None = None

    @property
    def page_count(self) -> int:
        return len(self.pages)


def find_markdown_files(input_dir: Path) -> list[Path]:
    """Return every ``.md`` file below input_dir.

    Raises:
        OSError: If the input tree cannot be listed.
    """
    return [path for path in read_directory_recursive(input_dir) if is_markdown(path)]


def process_markdown_file(
    source: Path,
    input_dir: Path,
    output_dir: Path,
    highlighter: CodeHighlighter,
    renderer: MarkdownRenderer | None = None,
    template: PageTemplate | None = None,
) -> Page:
    """Render one Markdown file into a Page.

    Args:
        source: Path to the Markdown source.
        input_dir: Root of the input tree.
        output_dir: Root of the output tree.
        highlighter: Highlighter configured for the build's theme.
        renderer: Optional Markdown renderer.
        template: Optional page template.

    Returns:
        The rendered Page; nothing is written yet.
    """
    renderer = renderer or MarkdownRenderer()
    template = template or PageTemplate()
    document = read_document(source)
    body_html = renderer.render(document.body, highlighter)
    output_path = output_path_for(source, input_dir, output_dir)
    assets_path = assets_path_for(output_path, output_dir)
    return Page(
        source=source,
        output_path=output_path,
        assets_path=assets_path,
        html=template.render(body_html, document.metadata, assets_path),
        metadata=document.metadata,
    )


def write_page(page: Page) -> None:
    """Write a rendered page, creating parent directories as needed."""
    ensure_directory(page.output_path.parent)
    with open(page.output_path, "w", encoding="utf-8") as f:
        f.write(page.html)


def build_site(
    input_dir: Path,
    output_dir: Path,
    options: BuildOptions | None = None,
    publisher: AssetPublisher | None = None,
) -> BuildResult:
    """Build the entire static site.

    A failure on a single file is logged and recorded in the result; the
    remaining files are still built.

    Args:
        input_dir: Directory containing the Markdown sources.
        output_dir: Directory to write the site to.
        options: Build settings; defaults to the default theme, no watch.
        publisher: Optional asset publisher.

    Returns:
        BuildResult with the written pages and the per-file errors.

    Raises:
        BuildError: If the output directory cannot be created or the input
            directory cannot be read.
        AssetError: If the highlighter assets cannot be published.
    """
    options = options or BuildOptions()
    input_dir = Path(input_dir).resolve()
    output_dir = Path(output_dir).resolve()

    logger.info("Reading input directory %s", input_dir)
    try:
        ensure_directory(output_dir)
    except OSError as exc:
        raise BuildError(
            output_dir, f"Cannot create output directory: {exc}", exc
        ) from exc

    try:
        sources = find_markdown_files(input_dir)
    except OSError as exc:
        raise BuildError(input_dir, f"Cannot read input directory: {exc}", exc) from exc

    if not sources:
        logger.warning("No Markdown files found in %s", input_dir)
        return BuildResult(pages=[], output_dir=output_dir)
    logger.info("Found %d Markdown files", len(sources))

    highlighter = CodeHighlighter.for_theme(options.theme)
    renderer = MarkdownRenderer()
    template = PageTemplate(footer=options.footer)

    pages: list[Page] = []
    errors: list[BuildError] = []
    for source in sources:
        try:
            page = process_markdown_file(
                source, input_dir, output_dir, highlighter, renderer, template
            )
            write_page(page)
        except Exception as exc:
            error = BuildError(source, _format_error_message(exc), exc)
            logger.error("Failed to process %s: %s", source, error.message)
            errors.append(error)
            continue
        pages.append(page)
        logger.info("Generated %s", page.output_path.relative_to(output_dir))

    (publisher or AssetPublisher()).publish(output_dir, highlighter.theme)
    logger.info("Successfully built %d pages", len(pages))

    result = BuildResult(
        pages=pages, output_dir=output_dir, errors=errors, theme=highlighter.theme
    )
    if options.watch:
        from .watch import SiteWatcher

        SiteWatcher(input_dir, output_dir, options).start()
    return result


def _format_error_message(exc: Exception) -> str:
    """Format an exception into a user-friendly error message.

    Args:
        exc: The exception to format.

    Returns:
        A human-readable error message.
    """
    if isinstance(exc, FrontMatterError):
        return str(exc)
    if isinstance(exc, UnicodeDecodeError):
        return f"File is not valid UTF-8: {exc.reason}"
    if isinstance(exc, OSError) and exc.strerror:
        target = f" ({exc.filename})" if exc.filename else ""
        return f"{exc.strerror}{target}"
    return f"{type(exc).__name__}: {exc}"
