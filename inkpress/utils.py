"""Utility functions for inkpress.

This module contains the filesystem and path helpers used by the site builder.

Key functions:
    read_directory_recursive: List every regular file below a directory.
    ensure_directory: Create a directory (and parents) if it is missing.
    is_markdown: Check if a path is a Markdown source file.
    output_path_for: Map a Markdown source to its HTML output path.
    assets_path_for: Compute the relative prefix from a page to ``assets/``.
"""

from __future__ import annotations

import os
from pathlib import Path

ASSETS_DIR_NAME = "assets"


def read_directory_recursive(root: Path) -> list[Path]:
    """Recursively list all regular files under a directory.

    Directories are traversed but not included in the result. Symbolic
    links are neither followed nor listed. Entries are visited in sorted
    name order so the result is deterministic.

    Args:
        root: Directory to walk.

    Returns:
        Absolute paths of every regular file reachable from root.

    Raises:
        OSError: If root or any descendant directory cannot be listed.
    """
    files: list[Path] = []

    def traverse(current: Path) -> None:
        with os.scandir(current) as it:
            entries = sorted(it, key=lambda entry: entry.name)
        for entry in entries:
            if entry.is_dir(follow_symlinks=False):
                traverse(Path(entry.path))
            elif entry.is_file(follow_symlinks=False):
                files.append(Path(entry.path))

    traverse(Path(root).resolve())
    return files


def ensure_directory(path: Path) -> None:
    """Ensure a directory exists, creating parents as needed.

    Args:
        path: Directory path to create.
    """
    Path(path).mkdir(parents=True, exist_ok=True)


def is_markdown(path: Path) -> bool:
    """Check if a path is a Markdown file.

    The comparison is case-sensitive: ``notes.MD`` is not a page.

    Args:
        path: Path to check.

    Returns:
        True if the file has exactly the .md extension.
    """
    return Path(path).suffix == ".md"


def output_path_for(source: Path, input_dir: Path, output_dir: Path) -> Path:
    """Map a Markdown source file to its HTML output path.

    The directory structure below input_dir is preserved.

    Args:
        source: Path to the Markdown source.
        input_dir: Root of the input tree.
        output_dir: Root of the output tree.

    Returns:
        Output path with the trailing .md replaced by .html.

    Examples:
        >>> output_path_for(Path("/in/b/c.md"), Path("/in"), Path("/out"))
        PosixPath('/out/b/c.html')
    """
    rel = Path(source).relative_to(input_dir)
    return Path(output_dir) / rel.with_suffix(".html")


def assets_path_for(output_path: Path, output_dir: Path) -> str:
    """Compute the relative path from a page to the shared assets directory.

    Args:
        output_path: Path of the rendered HTML page.
        output_dir: Root of the output tree.

    Returns:
        ``./assets`` for top-level pages, otherwise one ``../`` per level of
        nesting followed by ``assets``.

    Examples:
        >>> assets_path_for(Path("/out/a.html"), Path("/out"))
        './assets'

        >>> assets_path_for(Path("/out/b/c.html"), Path("/out"))
        '../assets'
    """
    depth = len(Path(output_path).relative_to(output_dir).parts) - 1
    if depth > 0:
        return "../" * depth + ASSETS_DIR_NAME
    return f"./{ASSETS_DIR_NAME}"
