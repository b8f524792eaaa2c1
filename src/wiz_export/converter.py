"""Convert rendered note HTML to GitHub-flavored Markdown."""

from __future__ import annotations

import re

from markdownify import MarkdownConverter as MarkdownifyConverter

from wiz_export.errors import ConvertError
from wiz_export.models import RESOURCE_DIR_NAME

MARKDOWN_SUFFIX = ".md"

RESOURCE_LINK_PATTERN = re.compile(r"!\[\]\(" + re.escape(RESOURCE_DIR_NAME) + r"/(.*?)\)")

TASK_MARKER_PATTERN = re.compile(r"^(\s*)(\[[ x]\]) +")


class GithubFlavoredConverter(MarkdownifyConverter):
    """markdownify converter producing GitHub-flavored output.

    Tables, ``~~`` strikethrough and fenced code come from markdownify
    itself. This subclass adds task-list checkboxes, drops the document
    head, and keeps images inside table cells and headings.
    """

    def __init__(self, **options):
        defaults = {
            "heading_style": "ATX",
            "bullets": "-",
            "keep_inline_images_in": ["td", "th", "h1", "h2", "h3", "h4", "h5", "h6"],
        }
        defaults.update(options)
        super().__init__(**defaults)

    def convert_input(self, el, text, parent_tags):
        if el.get("type", "").lower() != "checkbox":
            return text
        return "[x] " if el.has_attr("checked") else "[ ] "

    def convert_li(self, el, text, parent_tags):
        # the checkbox supplies its own trailing space
        text = TASK_MARKER_PATTERN.sub(r"\1\2 ", text or "", count=1)
        return super().convert_li(el, text, parent_tags)

    def convert_head(self, el, text, parent_tags):
        return ""

    convert_title = convert_head


class MarkdownConverter:
    """Converts note HTML to Markdown."""

    def __init__(self, strip_backslashes: bool = True):
        self.strip_backslashes = strip_backslashes
        self.engine = GithubFlavoredConverter()

    def convert(self, html: str) -> str:
        """Convert HTML to Markdown, stripping backslashes when enabled.

        Raises:
            ConvertError: If the conversion engine fails.
        """
        try:
            markdown = self.engine.convert(html)
        except Exception as e:
            raise ConvertError(f"HTML conversion failed: {e}") from e

        if self.strip_backslashes:
            markdown = strip_backslashes(markdown)
        return markdown


def strip_backslashes(text: str) -> str:
    """Remove every backslash, including the converter's escapes.

    This is lossy: ``C:\\path`` becomes ``C:path``.
    """
    return text.replace("\\", "")


def output_filename(title: str) -> str:
    """File name for a document, adding ``.md`` unless already present."""
    if title.endswith(MARKDOWN_SUFFIX):
        return title
    return title + MARKDOWN_SUFFIX


def extract_resource_names(markdown: str) -> list[str]:
    """Names of all ``![](index_files/<name>)`` images, in order, duplicates kept."""
    return RESOURCE_LINK_PATTERN.findall(markdown)
