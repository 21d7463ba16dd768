"""inkpress static site generator.

This package turns a directory tree of Markdown documents with YAML front
matter into a static HTML site with syntax-highlighted code blocks and
theme-aware styles.

The main entry point is the CLI module, which provides the ``build``
command; :func:`inkpress.build.build_site` is the programmatic equivalent.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
