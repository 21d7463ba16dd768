"""Asset publishing for inkpress.

This module writes the shared ``assets/`` directory of a built site: the
code stylesheet and runtime script shipped with the package, and a
generated ``style.css`` coloured by the active theme.

Key components:
- AssetPublisher: Copies highlighter assets and writes the site stylesheet.
- AssetError: Raised when the shipped highlighter assets cannot be read.
"""

from __future__ import annotations

import logging
from pathlib import Path

from jinja2 import Environment, PackageLoader

from .highlighting import theme_css_resource
from .themes import Theme
from .utils import ASSETS_DIR_NAME, ensure_directory

logger = logging.getLogger(__name__)

# Package data shipped alongside the code
_RESOURCES_DIR = Path(__file__).parent / "resources"

RUNTIME_SCRIPT = "prism.js"


class AssetError(OSError):
    """Highlighter assets could not be located or read."""


class AssetPublisher:
    """Publishes the static assets of a built site.

    Attributes:
        resources_dir: Directory holding the shipped highlighter assets.
        env: Jinja2 environment used for the stylesheet template.
    """

    stylesheet_template = "style.css.jinja"

    def __init__(self, resources_dir: Path | None = None):
        """Initialize the publisher.

        Args:
            resources_dir: Optional override of the shipped resources directory.
        """
        self.resources_dir = resources_dir or _RESOURCES_DIR
        self.env = Environment(
            loader=PackageLoader("inkpress", "templates"),
            keep_trailing_newline=True,
        )

    def publish(self, output_dir: Path, theme: Theme) -> Path:
        """Write all assets into ``output_dir/assets``.

        Args:
            output_dir: Root of the output tree.
            theme: Active theme of the build.

        Returns:
            Path to the assets directory.

        Raises:
            AssetError: If the highlighter assets cannot be copied.
        """
        assets_dir = Path(output_dir) / ASSETS_DIR_NAME
        ensure_directory(assets_dir)
        self._copy_highlighter_assets(assets_dir, theme)
        self._write_stylesheet(assets_dir, theme)
        logger.debug("Published assets for theme %s to %s", theme.name, assets_dir)
        return assets_dir

    def render_stylesheet(self, theme: Theme) -> str:
        """Render the site stylesheet for a theme."""
        template = self.env.get_template(self.stylesheet_template)
        return template.render(theme=theme, palette=theme.palette)

    def _copy_highlighter_assets(self, assets_dir: Path, theme: Theme) -> None:
        copies = (
            (self.resources_dir / theme_css_resource(theme.name), assets_dir / "prism.css"),
            (self.resources_dir / RUNTIME_SCRIPT, assets_dir / RUNTIME_SCRIPT),
        )
        try:
            for source, dest in copies:
                dest.write_text(source.read_text(encoding="utf-8"), encoding="utf-8")
        except OSError as exc:
            raise AssetError(f"Failed to copy highlighter assets: {exc}") from exc

    def _write_stylesheet(self, assets_dir: Path, theme: Theme) -> None:
        (assets_dir / "style.css").write_text(
            self.render_stylesheet(theme), encoding="utf-8"
        )
