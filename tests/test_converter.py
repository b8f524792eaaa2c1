"""Tests for the Markdown converter module."""

import pytest

from wiz_export.converter import (
    MarkdownConverter,
    extract_resource_names,
    output_filename,
    strip_backslashes,
)
from wiz_export.errors import ConvertError


@pytest.fixture
def converter() -> MarkdownConverter:
    """Converter with default settings."""
    return MarkdownConverter()


class TestMarkdownConverter:
    """Tests for HTML to Markdown conversion."""

    def test_paragraph_and_image(self, converter: MarkdownConverter) -> None:
        """Relative images become index_files references."""
        markdown = converter.convert('<p>Hello</p><img src="index_files/pic.png">')

        assert "Hello" in markdown
        assert "![](index_files/pic.png)" in markdown

    def test_atx_headings(self, converter: MarkdownConverter) -> None:
        """Headings use # markers."""
        markdown = converter.convert("<h2>Title</h2>")

        assert "## Title" in markdown

    def test_table(self, converter: MarkdownConverter) -> None:
        """Tables become pipe tables."""
        markdown = converter.convert(
            "<table><tr><th>A</th><th>B</th></tr><tr><td>1</td><td>2</td></tr></table>"
        )

        assert "| A | B |" in markdown
        assert "| 1 | 2 |" in markdown

    def test_image_in_table_cell_kept(self, converter: MarkdownConverter) -> None:
        """Images inside table cells are not reduced to alt text."""
        markdown = converter.convert(
            '<table><tr><th>Pic</th></tr><tr><td><img src="index_files/a.png"></td></tr></table>'
        )

        assert "![](index_files/a.png)" in markdown

    def test_strikethrough(self, converter: MarkdownConverter) -> None:
        """Deleted text uses ~~ markers."""
        markdown = converter.convert("<p><del>old</del> new</p>")

        assert "~~old~~" in markdown

    def test_fenced_code(self, converter: MarkdownConverter) -> None:
        """Preformatted blocks are fenced."""
        markdown = converter.convert("<pre>print(1)</pre>")

        assert "```" in markdown
        assert "print(1)" in markdown

    def test_task_list(self, converter: MarkdownConverter) -> None:
        """Checkboxes become task-list markers."""
        markdown = converter.convert(
            '<ul><li><input type="checkbox" checked>done</li>'
            '<li><input type="checkbox">todo</li></ul>'
        )

        assert "[x] done" in markdown
        assert "[ ] todo" in markdown

    def test_task_list_single_space(self, converter: MarkdownConverter) -> None:
        """Whitespace after a checkbox collapses to one space."""
        markdown = converter.convert(
            '<ul><li><input type="checkbox" checked> done</li>'
            '<li><input type="checkbox">  todo</li></ul>'
        )

        assert "- [x] done" in markdown
        assert "- [ ] todo" in markdown
        assert "]  " not in markdown

    def test_head_dropped(self, converter: MarkdownConverter) -> None:
        """The document title in <head> is not part of the body."""
        markdown = converter.convert(
            "<html><head><title>Window Title</title></head><body><p>Body</p></body></html>"
        )

        assert "Window Title" not in markdown
        assert "Body" in markdown

    def test_backslashes_stripped(self, converter: MarkdownConverter) -> None:
        """Literal backslashes are removed from the output."""
        markdown = converter.convert("<p>C:\\path</p>")

        assert "C:path" in markdown
        assert "\\" not in markdown

    def test_escapes_stripped(self, converter: MarkdownConverter) -> None:
        """Converter escapes are removed as well."""
        markdown = converter.convert("<p>snake_case and 2*3</p>")

        assert "snake_case and 2*3" in markdown

    def test_backslash_stripping_disabled(self) -> None:
        """Stripping can be turned off."""
        converter = MarkdownConverter(strip_backslashes=False)

        markdown = converter.convert("<p>snake_case</p>")

        assert "snake\\_case" in markdown

    def test_engine_failure_wrapped(self, converter: MarkdownConverter) -> None:
        """Engine exceptions become ConvertError."""

        class BrokenEngine:
            def convert(self, html: str) -> str:
                raise RuntimeError("boom")

        converter.engine = BrokenEngine()

        with pytest.raises(ConvertError, match="boom"):
            converter.convert("<p>x</p>")


class TestStripBackslashes:
    """Tests for strip_backslashes."""

    def test_removes_all(self) -> None:
        """Every backslash is removed."""
        assert strip_backslashes("C:\\path\\to\\file") == "C:pathtofile"

    def test_no_backslashes(self) -> None:
        """Text without backslashes is unchanged."""
        assert strip_backslashes("plain") == "plain"


class TestOutputFilename:
    """Tests for output_filename."""

    def test_adds_suffix(self) -> None:
        """Titles without .md gain the suffix."""
        assert output_filename("Plan") == "Plan.md"

    def test_keeps_existing_suffix(self) -> None:
        """Titles already ending in .md are unchanged."""
        assert output_filename("README.md") == "README.md"

    def test_other_suffix(self) -> None:
        """Other extensions are kept and .md appended."""
        assert output_filename("notes.txt") == "notes.txt.md"


class TestExtractResourceNames:
    """Tests for extract_resource_names."""

    def test_order_and_duplicates(self) -> None:
        """Names are returned in order, duplicates kept."""
        markdown = (
            "![](index_files/b.png)\n\ntext ![](index_files/a.jpg)\n\n![](index_files/b.png)"
        )

        assert extract_resource_names(markdown) == ["b.png", "a.jpg", "b.png"]

    def test_ignores_other_images(self) -> None:
        """Images with alt text or other paths are not resources."""
        markdown = (
            "![alt](index_files/x.png) ![](https://example.com/y.png) ![](images/z.png)"
        )

        assert extract_resource_names(markdown) == []

    def test_non_greedy(self) -> None:
        """Two references on one line are captured separately."""
        markdown = "![](index_files/a.png) and (note) ![](index_files/b.png)"

        assert extract_resource_names(markdown) == ["a.png", "b.png"]

    def test_no_references(self) -> None:
        """Text without references yields nothing."""
        assert extract_resource_names("# Title\n\nBody") == []
