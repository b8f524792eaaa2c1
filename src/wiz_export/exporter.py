"""Folder, document and resource export orchestration."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, Literal

from wiz_export.client import WizClient
from wiz_export.config import Settings
from wiz_export.converter import MarkdownConverter, extract_resource_names, output_filename
from wiz_export.errors import WizExportError, WriteError
from wiz_export.models import DocumentMetadata, ExportTarget, Session

logger = logging.getLogger(__name__)

Operation = Literal["list_folder", "create_directory", "export_document", "fetch_resource"]


@dataclass
class ItemFailure:
    """A folder, document or resource that could not be exported."""

    item: str
    operation: Operation
    error: WizExportError


@dataclass
class DocumentReport:
    """Outcome of exporting one document and its resources."""

    doc_guid: str
    title: str
    output_file: str | None = None
    resources_fetched: int = 0
    resources_skipped: int = 0
    failures: list[ItemFailure] = field(default_factory=list)

    @property
    def status(self) -> Literal["success", "partial", "failed"]:
        if self.output_file is None:
            return "failed"
        if self.failures:
            return "partial"
        return "success"


@dataclass
class FolderReport:
    """Outcome of exporting one folder."""

    folder: str
    output_dir: str | None = None
    documents: list[DocumentReport] = field(default_factory=list)
    failures: list[ItemFailure] = field(default_factory=list)


@dataclass
class ExportResult:
    """Result of a full export run."""

    folders: list[FolderReport] = field(default_factory=list)
    total_time_ms: int = 0

    @property
    def documents(self) -> list[DocumentReport]:
        return [doc for folder in self.folders for doc in folder.documents]

    @property
    def documents_exported(self) -> int:
        return sum(1 for doc in self.documents if doc.status != "failed")

    @property
    def documents_failed(self) -> int:
        return sum(1 for doc in self.documents if doc.status == "failed")

    @property
    def resources_fetched(self) -> int:
        return sum(doc.resources_fetched for doc in self.documents)

    @property
    def resources_skipped(self) -> int:
        return sum(doc.resources_skipped for doc in self.documents)

    @property
    def failures(self) -> list[ItemFailure]:
        """Every failure of the run, folder level first within each folder."""
        failures: list[ItemFailure] = []
        for folder in self.folders:
            failures.extend(folder.failures)
            for doc in folder.documents:
                failures.extend(doc.failures)
        return failures


def contained_path(directory: str | Path, name: str) -> Path:
    """Join ``name`` onto ``directory``, refusing paths that leave it.

    Raises:
        WriteError: If the joined path resolves outside ``directory``.
    """
    base = Path(directory).resolve()
    path = (base / name).resolve()
    if path == base or not path.is_relative_to(base):
        raise WriteError(f"Refusing to write {name!r} outside {directory}")
    return path


def split_folders(folders: str) -> list[str]:
    """Split a comma-separated folder list like ``/Journal/,/Work/``."""
    return [folder.strip() for folder in folders.split(",") if folder.strip()]


class NoteExporter:
    """Exports folders of notes to Markdown files and resources.

    Everything runs sequentially. A failed folder, document or resource is
    recorded and logged, and the export moves on to its next sibling. Only
    a failed login aborts the run.
    """

    def __init__(
        self,
        settings: Settings,
        client: WizClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.client = client or WizClient(settings.api)
        self.converter = MarkdownConverter(settings.output.strip_backslashes)
        self._sleep = sleep

    def run(
        self,
        user_id: str,
        password: str,
        folders: str | Iterable[str],
        output_dir: str | Path | None = None,
    ) -> ExportResult:
        """Log in and export every folder.

        Args:
            user_id: Account identifier, usually an email address.
            password: Account password.
            folders: Comma-separated folder paths, or an iterable of them.
            output_dir: Root of the export; defaults to the configured one.

        Returns:
            ExportResult with per-folder and per-document reports.

        Raises:
            AuthError: If login fails. Nothing is exported in that case.
        """
        start_time = time.time()
        root = Path(output_dir) if output_dir is not None else self.settings.output.output_dir
        folder_list = split_folders(folders) if isinstance(folders, str) else list(folders)

        session = self.client.login(user_id, password)
        logger.info(
            f"Logged in as {session.display_name or user_id} "
            f"(kbServer: {session.kb_server}, kbGuid: {session.kb_guid})"
        )

        result = ExportResult()
        for folder in folder_list:
            result.folders.append(self.export_folder(session, root, folder))
            self._pause()

        result.total_time_ms = int((time.time() - start_time) * 1000)
        logger.info(
            f"Export complete: {result.documents_exported} documents exported, "
            f"{result.documents_failed} failed, {result.resources_fetched} resources fetched, "
            f"{result.resources_skipped} skipped, {result.total_time_ms}ms"
        )
        return result

    def export_folder(self, session: Session, root: str | Path, folder: str) -> FolderReport:
        """Export all listed documents of one folder."""
        logger.info(f"Exporting folder: {folder}")
        report = FolderReport(folder=folder)

        try:
            docs = self.client.list_folder(session, folder)
        except WizExportError as e:
            report.failures.append(self._failure(folder, "list_folder", e))
            return report

        target = ExportTarget.for_folder(root, folder)
        try:
            target.create()
        except WizExportError as e:
            report.failures.append(self._failure(folder, "create_directory", e))
            return report
        report.output_dir = str(target.output_dir)

        logger.info(f"Found {len(docs)} documents in {folder}")
        for doc in docs:
            report.documents.append(self._export_document_with_resources(session, target, doc))
            self._pause()

        return report

    def export_document(
        self, session: Session, output_dir: str | Path, doc: DocumentMetadata
    ) -> list[str]:
        """Write one document as Markdown.

        Returns:
            Resource names referenced by the Markdown, in order of
            appearance and including duplicates.

        Raises:
            FetchError: If the document cannot be downloaded.
            ConvertError: If the HTML cannot be converted.
            WriteError: If the Markdown file cannot be written or the title
                points outside ``output_dir``.
        """
        output_path = contained_path(output_dir, output_filename(doc.title))

        html = self.client.fetch_document(session, doc)
        markdown = self.converter.convert(html)

        try:
            output_path.write_text(markdown, encoding="utf-8")
        except OSError as e:
            raise WriteError(f"Cannot write {output_path}: {e}") from e

        return extract_resource_names(markdown)

    def fetch_resource(
        self, session: Session, resource_dir: str | Path, doc: DocumentMetadata, filename: str
    ) -> bool:
        """Download one resource unless it already exists locally.

        Returns:
            True if the resource was downloaded, False if it was skipped.

        Raises:
            FetchError: If the resource cannot be downloaded.
            WriteError: If the resource cannot be written or its name
                points outside ``resource_dir``.
        """
        resource_path = contained_path(resource_dir, filename)
        if resource_path.exists():
            logger.debug(f"Skipping existing resource: {resource_path}")
            return False

        data = self.client.fetch_resource(session, doc, filename)
        try:
            resource_path.write_bytes(data)
        except OSError as e:
            raise WriteError(f"Cannot write {resource_path}: {e}") from e
        return True

    def _export_document_with_resources(
        self, session: Session, target: ExportTarget, doc: DocumentMetadata
    ) -> DocumentReport:
        logger.info(
            f"Exporting document: {doc.title} "
            f"(docGuid: {doc.doc_guid}, attachments: {doc.attachment_count})"
        )
        report = DocumentReport(doc_guid=doc.doc_guid, title=doc.title)

        try:
            names = self.export_document(session, target.output_dir, doc)
        except WizExportError as e:
            report.failures.append(self._failure(f"{doc.title} ({doc.doc_guid})", "export_document", e))
            return report
        report.output_file = str(target.output_dir / output_filename(doc.title))

        logger.info(f"Resources referenced by {doc.title}: {len(names)}")
        for name in names:
            try:
                fetched = self.fetch_resource(session, target.resource_dir, doc, name)
            except WizExportError as e:
                report.failures.append(self._failure(name, "fetch_resource", e))
                self._pause()
                continue

            if fetched:
                report.resources_fetched += 1
                self._pause()
            else:
                report.resources_skipped += 1

        return report

    def _failure(self, item: str, operation: Operation, error: WizExportError) -> ItemFailure:
        logger.error(f"{operation} failed for {item}: {error}")
        return ItemFailure(item=item, operation=operation, error=error)

    def _pause(self) -> None:
        delay = self.settings.api.request_delay
        if delay > 0:
            self._sleep(delay)
