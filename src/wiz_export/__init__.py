"""WizNote to Markdown exporter.

A Python library and CLI tool for exporting WizNote folders to Markdown
files with their embedded images.
"""

from wiz_export.client import WizClient
from wiz_export.config import Settings
from wiz_export.converter import MarkdownConverter
from wiz_export.errors import (
    ApiError,
    AuthError,
    ConvertError,
    DirectoryError,
    FetchError,
    ParseError,
    WizExportError,
    WriteError,
)
from wiz_export.exporter import DocumentReport, ExportResult, FolderReport, NoteExporter
from wiz_export.models import DocumentMetadata, ExportTarget, ResultEnvelope, Session

__version__ = "0.1.0"

__all__ = [
    "Settings",
    "WizClient",
    "MarkdownConverter",
    "NoteExporter",
    "ExportResult",
    "FolderReport",
    "DocumentReport",
    "Session",
    "DocumentMetadata",
    "ResultEnvelope",
    "ExportTarget",
    "WizExportError",
    "AuthError",
    "FetchError",
    "ParseError",
    "ApiError",
    "ConvertError",
    "WriteError",
    "DirectoryError",
]
