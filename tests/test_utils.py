from pathlib import Path

import pytest

from inkpress.html_utils import escape_html
from inkpress.utils import (
    assets_path_for,
    ensure_directory,
    is_markdown,
    output_path_for,
    read_directory_recursive,
)


def test_read_directory_recursive_lists_files_only(tmp_path):
    (tmp_path / "a.md").write_text("a", encoding="utf-8")
    (tmp_path / "b" / "c").mkdir(parents=True)
    (tmp_path / "b" / "c.md").write_text("c", encoding="utf-8")
    (tmp_path / "b" / "c" / "notes.txt").write_text("n", encoding="utf-8")
    (tmp_path / "empty").mkdir()

    files = read_directory_recursive(tmp_path)

    root = tmp_path.resolve()
    assert files == [
        root / "a.md",
        root / "b" / "c" / "notes.txt",
        root / "b" / "c.md",
    ]
    assert all(path.is_absolute() for path in files)


def test_read_directory_recursive_resolves_relative_root(tmp_path, monkeypatch):
    (tmp_path / "docs").mkdir()
    (tmp_path / "docs" / "index.md").write_text("x", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    assert read_directory_recursive(Path("docs")) == [
        tmp_path.resolve() / "docs" / "index.md"
    ]


def test_read_directory_recursive_missing_root_raises(tmp_path):
    with pytest.raises(OSError):
        read_directory_recursive(tmp_path / "missing")


def test_ensure_directory_is_idempotent(tmp_path):
    target = tmp_path / "a" / "b" / "c"
    ensure_directory(target)
    ensure_directory(target)
    assert target.is_dir()


def test_is_markdown_is_case_sensitive():
    assert is_markdown(Path("page.md"))
    assert not is_markdown(Path("page.MD"))
    assert not is_markdown(Path("page.markdown"))
    assert not is_markdown(Path("page.md.txt"))


def test_output_path_preserves_structure():
    assert output_path_for(Path("/in/a.md"), Path("/in"), Path("/out")) == Path(
        "/out/a.html"
    )
    assert output_path_for(
        Path("/in/b/c.md"), Path("/in"), Path("/out")
    ) == Path("/out/b/c.html")


def test_assets_path_depends_on_depth():
    out = Path("/out")
    assert assets_path_for(out / "a.html", out) == "./assets"
    assert assets_path_for(out / "b" / "c.html", out) == "../assets"
    assert assets_path_for(out / "b" / "c" / "d.html", out) == "../../assets"


def test_escape_html_covers_all_special_characters():
    assert escape_html("& < > \" '") == "&amp; &lt; &gt; &quot; &#39;"
    assert escape_html("plain") == "plain"
    # Already escaped text is escaped again.
    assert escape_html("&amp;") == "&amp;amp;"
