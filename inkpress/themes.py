"""Built-in themes for inkpress.

A theme names a colour palette used by the generated ``style.css``, a
light/dark classification, and the highlighter stylesheet shipped for it.
The set of themes is fixed; unknown names are resolved by
:func:`inkpress.highlighting.select_theme`.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_THEME = "default"


@dataclass(frozen=True)
class ThemePalette:
    """Colour tokens interpolated into the generated stylesheet."""

    primary: str
    secondary: str
    accent: str
    background: str
    text: str
    text_secondary: str
    border: str
    code_background: str
    shadow: str


@dataclass(frozen=True)
class Theme:
    """A named palette with its light/dark classification.

    Attributes:
        name: Theme identifier as accepted by ``--theme``.
        palette: Colour tokens for the site stylesheet.
        dark: Whether the theme uses a dark background.
    """

    name: str
    palette: ThemePalette
    dark: bool


THEMES: dict[str, Theme] = {
    "default": Theme(
        name="default",
        palette=ThemePalette(
            primary="#2c3e50",
            secondary="#34495e",
            accent="#3498db",
            background="#ffffff",
            text="#2c3e50",
            text_secondary="#7f8c8d",
            border="#ecf0f1",
            code_background="#f8f9fa",
            shadow="rgba(0, 0, 0, 0.1)",
        ),
        dark=False,
    ),
    "dark": Theme(
        name="dark",
        palette=ThemePalette(
            primary="#e74c3c",
            secondary="#c0392b",
            accent="#e67e22",
            background="#2c3e50",
            text="#ecf0f1",
            text_secondary="#bdc3c7",
            border="#34495e",
            code_background="#34495e",
            shadow="rgba(0, 0, 0, 0.3)",
        ),
        dark=True,
    ),
    "funky": Theme(
        name="funky",
        palette=ThemePalette(
            primary="#d80800",
            secondary="#952bb9",
            accent="#00a8c6",
            background="#000000",
            text="#ffffff",
            text_secondary="#cccccc",
            border="#333333",
            code_background="#2d2d2d",
            shadow="rgba(0, 0, 0, 0.7)",
        ),
        dark=True,
    ),
    "okaidia": Theme(
        name="okaidia",
        palette=ThemePalette(
            primary="#f92672",
            secondary="#a6e22e",
            accent="#66d9ef",
            background="#272822",
            text="#f8f8f2",
            text_secondary="#75715e",
            border="#3e3d32",
            code_background="#3e3d32",
            shadow="rgba(0, 0, 0, 0.5)",
        ),
        dark=True,
    ),
    "twilight": Theme(
        name="twilight",
        palette=ThemePalette(
            primary="#cf6a4c",
            secondary="#9b703f",
            accent="#7587a6",
            background="#141414",
            text="#f8f8f8",
            text_secondary="#5f5a60",
            border="#323232",
            code_background="#1e1e1e",
            shadow="rgba(0, 0, 0, 0.6)",
        ),
        dark=True,
    ),
    "coy": Theme(
        name="coy",
        palette=ThemePalette(
            primary="#5e6687",
            secondary="#6679cc",
            accent="#c94922",
            background="#fdfdfd",
            text="#5e6687",
            text_secondary="#9a9fb8",
            border="#e0e5e6",
            code_background="#f5f2f0",
            shadow="rgba(0, 0, 0, 0.08)",
        ),
        dark=False,
    ),
    "solarizedlight": Theme(
        name="solarizedlight",
        palette=ThemePalette(
            primary="#586e75",
            secondary="#657b83",
            accent="#268bd2",
            background="#fdf6e3",
            text="#657b83",
            text_secondary="#93a1a1",
            border="#eee8d5",
            code_background="#eee8d5",
            shadow="rgba(0, 0, 0, 0.1)",
        ),
        dark=False,
    ),
    "tomorrow": Theme(
        name="tomorrow",
        palette=ThemePalette(
            primary="#4271ae",
            secondary="#8959a8",
            accent="#718c00",
            background="#ffffff",
            text="#4d4d4c",
            text_secondary="#8e908c",
            border="#e0e0e0",
            code_background="#f5f5f5",
            shadow="rgba(0, 0, 0, 0.1)",
        ),
        dark=False,
    ),
}


def get_theme(name: str) -> Theme | None:
    """Look up a built-in theme by name.

    Args:
        name: Theme identifier.

    Returns:
        The Theme, or None if the name is not a built-in theme.
    """
    return THEMES.get(name)
