import logging
from pathlib import Path

import pytest

from inkpress import build as build_module
from inkpress.assets import AssetError, AssetPublisher
from inkpress.build import (
    BuildError,
    BuildOptions,
    _format_error_message,
    build_site,
    find_markdown_files,
    process_markdown_file,
)
from inkpress.content import FrontMatterError
from inkpress.highlighting import CodeHighlighter, theme_css_resource
from inkpress.themes import THEMES

RESOURCES_DIR = Path(build_module.__file__).parent / "resources"


def create_input(tmp_path: Path) -> Path:
    source = tmp_path / "content"
    (source / "b").mkdir(parents=True)
    (source / "a.md").write_text("---\ntitle: A\n---\n# A page\n", encoding="utf-8")
    (source / "b" / "c.md").write_text("# Nested\n", encoding="utf-8")
    return source


def test_asset_publisher_writes_all_assets(tmp_path):
    assets_dir = AssetPublisher().publish(tmp_path, THEMES["default"])
    assert assets_dir == tmp_path / "assets"
    assert sorted(p.name for p in assets_dir.iterdir()) == [
        "prism.css",
        "prism.js",
        "style.css",
    ]
    assert (assets_dir / "prism.js").read_text(encoding="utf-8") == (
        RESOURCES_DIR / "prism.js"
    ).read_text(encoding="utf-8")


@pytest.mark.parametrize("name", sorted(THEMES))
def test_each_theme_publishes_its_palette_and_stylesheet(name, tmp_path):
    theme = THEMES[name]
    assets_dir = AssetPublisher().publish(tmp_path, theme)

    style = (assets_dir / "style.css").read_text(encoding="utf-8")
    assert theme.palette.accent in style
    assert f"--primary-color: {theme.palette.primary};" in style
    assert f"inkpress site styles - {name}" in style

    prism_css = (assets_dir / "prism.css").read_text(encoding="utf-8")
    expected = (RESOURCES_DIR / theme_css_resource(name)).read_text(encoding="utf-8")
    assert prism_css == expected
    assert f"inkpress code theme: {name}" in prism_css


def test_stylesheet_reflects_dark_classification():
    publisher = AssetPublisher()
    dark = publisher.render_stylesheet(THEMES["okaidia"])
    light = publisher.render_stylesheet(THEMES["coy"])
    assert "color-scheme: dark;" in dark
    assert "text-shadow: 0 2px 4px var(--shadow-color);" in dark
    assert "color-scheme: light;" in light
    assert "text-shadow: none;" in light


def test_stylesheet_is_overwritten(tmp_path):
    assets = tmp_path / "assets"
    assets.mkdir()
    (assets / "style.css").write_text("stale", encoding="utf-8")
    AssetPublisher().publish(tmp_path, THEMES["tomorrow"])
    style = (assets / "style.css").read_text(encoding="utf-8")
    assert "stale" not in style
    assert THEMES["tomorrow"].palette.accent in style


def test_missing_highlighter_resources_raise(tmp_path):
    publisher = AssetPublisher(resources_dir=tmp_path / "missing")
    with pytest.raises(AssetError, match="Failed to copy highlighter assets"):
        publisher.publish(tmp_path / "out", THEMES["default"])


def test_find_markdown_files_filters_extension(tmp_path):
    (tmp_path / "a.md").write_text("a", encoding="utf-8")
    (tmp_path / "b.MD").write_text("b", encoding="utf-8")
    (tmp_path / "c.txt").write_text("c", encoding="utf-8")
    assert [p.name for p in find_markdown_files(tmp_path)] == ["a.md"]


def test_process_markdown_file_builds_page(tmp_path):
    source = create_input(tmp_path)
    out = tmp_path / "out"
    page = process_markdown_file(
        source / "b" / "c.md", source, out, CodeHighlighter.for_theme("default")
    )
    assert page.output_path == out / "b" / "c.html"
    assert page.assets_path == "../assets"
    assert "<h1>Nested</h1>" in page.html
    assert "<title>Untitled</title>" in page.html
    assert not page.output_path.exists()


def test_build_mirrors_tree_and_asset_prefixes(tmp_path):
    source = create_input(tmp_path)
    (source / "b" / "image.png").write_bytes(b"\x89PNG")
    out = tmp_path / "out"

    result = build_site(source, out)

    pages = sorted(
        p.relative_to(out).as_posix()
        for p in out.rglob("*.html")
    )
    assert pages == ["a.html", "b/c.html"]
    assert not (out / "b" / "image.png").exists()
    assert result.page_count == 2
    assert result.errors == []

    top = (out / "a.html").read_text(encoding="utf-8")
    nested = (out / "b" / "c.html").read_text(encoding="utf-8")
    assert 'href="./assets/style.css"' in top
    assert 'src="./assets/prism.js"' in top
    assert 'href="../assets/style.css"' in nested
    assert 'href="../assets/prism.css"' in nested


def test_end_to_end_single_page(tmp_path):
    source = tmp_path / "in"
    source.mkdir()
    (source / "page.md").write_text("---\ntitle: Hello\n---\n# Hi\n", encoding="utf-8")
    out = tmp_path / "out"

    result = build_site(source, out)

    html = (out / "page.html").read_text(encoding="utf-8")
    assert "<title>Hello</title>" in html
    assert "<h1>Hi</h1>" in html
    for name in ("style.css", "prism.css", "prism.js"):
        assert (out / "assets" / name).exists()
    assert result.theme is THEMES["default"]


def test_code_blocks_are_highlighted_in_build(tmp_path):
    source = tmp_path / "in"
    source.mkdir()
    (source / "code.md").write_text(
        "```python\ndef f():\n    return 1\n```\n\n```mystery\n<x>\n```\n",
        encoding="utf-8",
    )
    out = tmp_path / "out"
    build_site(source, out, BuildOptions(theme="okaidia"))
    html = (out / "code.html").read_text(encoding="utf-8")
    assert '<pre class="language-python"><code class="language-python">' in html
    assert '<span class="k">def</span>' in html
    assert "<pre><code>&lt;x&gt;\n</code></pre>" in html


def test_empty_input_is_a_successful_noop(tmp_path, caplog):
    source = tmp_path / "in"
    source.mkdir()
    (source / "notes.txt").write_text("not markdown", encoding="utf-8")
    out = tmp_path / "out"

    with caplog.at_level(logging.INFO):
        result = build_site(source, out)

    assert result.page_count == 0
    assert result.errors == []
    assert result.theme is None
    assert out.is_dir()
    assert list(out.iterdir()) == []
    assert not (out / "assets").exists()
    assert "No Markdown files found" in caplog.text


def test_unknown_theme_warns_once_and_matches_default(tmp_path, caplog):
    source = create_input(tmp_path)
    default_out = tmp_path / "default"
    other_out = tmp_path / "other"

    build_site(source, default_out, BuildOptions(theme="default"))
    caplog.clear()
    with caplog.at_level(logging.WARNING):
        result = build_site(source, other_out, BuildOptions(theme="vaporwave"))

    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "vaporwave" in warnings[0].getMessage()
    assert result.theme is THEMES["default"]
    for name in ("style.css", "prism.css", "prism.js"):
        assert (other_out / "assets" / name).read_text(encoding="utf-8") == (
            default_out / "assets" / name
        ).read_text(encoding="utf-8")


def test_write_failure_skips_only_that_file(tmp_path, monkeypatch, caplog):
    source = tmp_path / "in"
    source.mkdir()
    (source / "good.md").write_text("# Good\n", encoding="utf-8")
    (source / "bad.md").write_text("# Bad\n", encoding="utf-8")
    out = tmp_path / "out"

    original_write = build_module.write_page

    def flaky_write(page):
        if page.source.name == "bad.md":
            raise OSError(28, "No space left on device", str(page.output_path))
        original_write(page)

    monkeypatch.setattr("inkpress.build.write_page", flaky_write)
    with caplog.at_level(logging.ERROR):
        result = build_site(source, out)

    assert result.page_count == 1
    assert [p.source.name for p in result.pages] == ["good.md"]
    assert len(result.errors) == 1
    error = result.errors[0]
    assert error.source_path.name == "bad.md"
    assert "No space left on device" in error.message
    assert (out / "good.html").exists()
    assert not (out / "bad.html").exists()
    assert (out / "assets" / "style.css").exists()
    failures = [r for r in caplog.records if r.levelno == logging.ERROR]
    assert len(failures) == 1
    assert "bad.md" in failures[0].getMessage()


def test_malformed_front_matter_is_a_per_file_error(tmp_path, caplog):
    source = tmp_path / "in"
    source.mkdir()
    (source / "broken.md").write_text(
        "---\ntitle: [unclosed\n---\n# Broken\n", encoding="utf-8"
    )
    (source / "fine.md").write_text("---\ntitle: Fine\n---\n# Fine\n", encoding="utf-8")
    out = tmp_path / "out"

    with caplog.at_level(logging.ERROR):
        result = build_site(source, out)

    assert result.page_count == 1
    assert isinstance(result.errors[0].original_error, FrontMatterError)
    assert "Invalid front matter" in result.errors[0].message
    assert (out / "fine.html").exists()
    assert not (out / "broken.html").exists()
    assert "Failed to process" in caplog.text


def test_invalid_utf8_is_a_per_file_error(tmp_path):
    source = tmp_path / "in"
    source.mkdir()
    (source / "latin1.md").write_bytes("caf\xe9".encode("latin-1"))
    (source / "ok.md").write_text("ok", encoding="utf-8")
    result = build_site(source, tmp_path / "out")
    assert result.page_count == 1
    assert result.errors[0].message.startswith("File is not valid UTF-8")


def test_missing_input_directory_is_fatal(tmp_path):
    with pytest.raises(BuildError, match="Cannot read input directory"):
        build_site(tmp_path / "nope", tmp_path / "out")


def test_uncreatable_output_directory_is_fatal(tmp_path):
    source = create_input(tmp_path)
    blocker = tmp_path / "file"
    blocker.write_text("x", encoding="utf-8")
    with pytest.raises(BuildError, match="Cannot create output directory") as info:
        build_site(source, blocker)
    assert info.value.source_path == blocker.resolve()


def test_missing_assets_abort_build(tmp_path):
    source = create_input(tmp_path)
    publisher = AssetPublisher(resources_dir=tmp_path / "missing")
    with pytest.raises(AssetError):
        build_site(source, tmp_path / "out", publisher=publisher)


def test_watch_option_starts_watcher_after_build(tmp_path, monkeypatch):
    source = create_input(tmp_path)
    out = tmp_path / "out"
    started = {}

    def fake_start(self):
        started["options"] = self.options
        started["built"] = (out / "a.html").exists()

    monkeypatch.setattr("inkpress.watch.SiteWatcher.start", fake_start)
    build_site(source, out, BuildOptions(theme="coy", watch=True))

    assert started["built"] is True
    assert started["options"].watch is False
    assert started["options"].theme == "coy"


def test_format_error_message():
    assert _format_error_message(ValueError("bad")) == "ValueError: bad"
    assert (
        _format_error_message(FrontMatterError("Invalid front matter: x"))
        == "Invalid front matter: x"
    )
    assert (
        _format_error_message(FileNotFoundError(2, "No such file", "/tmp/x.md"))
        == "No such file (/tmp/x.md)"
    )


def test_build_error_message_includes_path():
    error = BuildError(Path("docs/a.md"), "boom")
    assert str(error) == "docs/a.md: boom"
    assert error.original_error is None
