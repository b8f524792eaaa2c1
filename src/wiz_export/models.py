"""Data model for sessions, documents and API responses."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from wiz_export.errors import ApiError, DirectoryError, ParseError

RESOURCE_DIR_NAME = "index_files"
RETURN_CODE_OK = 200


@dataclass(frozen=True)
class Session:
    """An authenticated user session returned by the login endpoint."""

    user_guid: str
    email: str
    mobile: str
    display_name: str
    kb_type: str
    kb_server: str
    kb_guid: str
    token: str

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Session":
        """Create a Session from the login ``result`` object."""
        return cls(
            user_guid=data.get("userGuid") or "",
            email=data.get("email") or "",
            mobile=data.get("mobile") or "",
            display_name=data.get("displayName") or "",
            kb_type=data.get("kbType") or "",
            kb_server=(data.get("kbServer") or "").rstrip("/"),
            kb_guid=data.get("kbGuid") or "",
            token=data.get("token") or "",
        )


@dataclass(frozen=True)
class DocumentMetadata:
    """A note as listed in a folder."""

    doc_guid: str
    title: str
    category: str = ""
    attachment_count: int = 0
    created: int = 0
    accessed: int = 0
    keywords: str = ""
    cover_image: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "DocumentMetadata":
        """Create metadata from one element of a folder listing."""
        return cls(
            doc_guid=data.get("docGuid") or "",
            title=data.get("title") or "",
            category=data.get("category") or "",
            attachment_count=data.get("attachmentCount") or 0,
            created=data.get("created") or 0,
            accessed=data.get("accessed") or 0,
            keywords=data.get("keywords") or "",
            cover_image=data.get("coverImage") or "",
        )


@dataclass
class ResultEnvelope:
    """The ``{returnCode, returnMessage, result}`` wrapper of every JSON response."""

    return_code: int
    return_message: str
    result: Any = None

    @classmethod
    def from_payload(cls, payload: Any) -> "ResultEnvelope":
        """Build an envelope from decoded JSON.

        Raises:
            ParseError: If the payload is not an envelope object.
        """
        if not isinstance(payload, dict):
            raise ParseError(f"Expected a JSON object, got {type(payload).__name__}")

        return_code = payload.get("returnCode")
        if isinstance(return_code, bool) or not isinstance(return_code, int):
            raise ParseError(f"Missing or invalid returnCode: {return_code!r}")

        return cls(
            return_code=return_code,
            return_message=payload.get("returnMessage") or "",
            result=payload.get("result"),
        )

    @property
    def ok(self) -> bool:
        return self.return_code == RETURN_CODE_OK

    def unwrap(self) -> Any:
        """Return the result, or raise ApiError for a failed call."""
        if not self.ok:
            raise ApiError(self.return_code, self.return_message)
        return self.result


@dataclass
class ExportTarget:
    """Output directory of a folder and its resource subdirectory."""

    folder: str
    output_dir: Path
    resource_dir: Path

    @classmethod
    def for_folder(cls, root: str | Path, folder: str) -> "ExportTarget":
        """Map a folder path like ``/Notes/`` to ``root/Notes/``."""
        relative = folder[1:] if folder.startswith("/") else folder
        output_dir = Path(root) / relative
        return cls(
            folder=folder,
            output_dir=output_dir,
            resource_dir=output_dir / RESOURCE_DIR_NAME,
        )

    def create(self) -> None:
        """Create both directories if they are missing.

        Raises:
            DirectoryError: If either directory cannot be created.
        """
        for directory in (self.output_dir, self.resource_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise DirectoryError(f"Cannot create directory {directory}: {e}") from e
