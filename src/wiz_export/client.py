"""HTTP client for the WizNote API."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import quote

import requests

from wiz_export.config import ApiSettings
from wiz_export.errors import AuthError, FetchError, ParseError, WizExportError
from wiz_export.models import RESOURCE_DIR_NAME, DocumentMetadata, ResultEnvelope, Session

logger = logging.getLogger(__name__)

TOKEN_HEADER = "X-Wiz-Token"


class WizClient:
    """Talks to the login, folder listing and note view endpoints.

    All requests go through one ``requests.Session``. Nothing is retried.
    """

    def __init__(self, settings: ApiSettings, http: requests.Session | None = None):
        self.settings = settings
        self.http = http or requests.Session()

    def login(self, user_id: str, password: str) -> Session:
        """Exchange credentials for a session.

        Raises:
            AuthError: On any transport, HTTP, parse or API failure.
        """
        url = self.settings.login_url
        logger.debug(f"login: {url}")

        try:
            response = self.http.post(
                url,
                json={"userId": user_id, "password": password},
                timeout=self.settings.timeout,
            )
        except requests.RequestException as e:
            raise AuthError(f"Login request failed: {e}") from e

        if response.status_code != 200:
            raise AuthError(f"Login failed: HTTP {response.status_code} {response.reason}")

        try:
            result = self._parse_envelope(response.content).unwrap()
        except WizExportError as e:
            raise AuthError(str(e)) from e

        if not isinstance(result, dict):
            raise AuthError("Login response carries no user record")

        return Session.from_dict(result)

    def list_folder(self, session: Session, folder: str) -> list[DocumentMetadata]:
        """List the documents of a folder.

        Only the first ``page_size`` documents are returned.

        Raises:
            FetchError: On transport failure or non-200 status.
            ParseError: If the body is not a valid envelope.
            ApiError: If the envelope carries a non-200 return code.
        """
        url = (
            f"{session.kb_server}/ks/note/list/category/{session.kb_guid}"
            f"?start=0&count={self.settings.page_size}"
            f"&category={quote(folder, safe='')}&orderBy={self.settings.order_by}"
        )
        result = self._parse_envelope(self._get(url, session.token)).unwrap()

        if result is None:
            return []
        if not isinstance(result, list):
            raise ParseError(f"Expected a document list, got {type(result).__name__}")

        return [DocumentMetadata.from_dict(item) for item in result if isinstance(item, dict)]

    def fetch_document(self, session: Session, doc: DocumentMetadata) -> str:
        """Fetch the rendered HTML of a document."""
        url = (
            f"{session.kb_server}/ks/note/view/{session.kb_guid}/{doc.doc_guid}"
            "?objType=document"
        )
        return self._get(url, session.token).decode("utf-8", errors="replace")

    def fetch_resource(self, session: Session, doc: DocumentMetadata, filename: str) -> bytes:
        """Fetch the bytes of a resource embedded in a document."""
        url = (
            f"{session.kb_server}/ks/note/view/{session.kb_guid}/{doc.doc_guid}"
            f"/{RESOURCE_DIR_NAME}/{filename}"
        )
        return self._get(url, session.token)

    def _get(self, url: str, token: str) -> bytes:
        """Issue an authenticated GET and return the body."""
        logger.debug(f"fetch: {url}")

        try:
            response = self.http.get(
                url,
                headers={TOKEN_HEADER: token},
                timeout=self.settings.timeout,
            )
        except requests.RequestException as e:
            raise FetchError(f"Request to {url} failed: {e}", url=url) from e

        if response.status_code != 200:
            raise FetchError(
                f"HTTP {response.status_code} {response.reason} for {url}",
                url=url,
                status_code=response.status_code,
            )

        return response.content

    @staticmethod
    def _parse_envelope(body: bytes) -> ResultEnvelope:
        try:
            payload: Any = json.loads(body)
        except ValueError as e:
            raise ParseError(f"Invalid JSON response: {e}") from e
        return ResultEnvelope.from_payload(payload)
