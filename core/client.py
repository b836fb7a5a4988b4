# =============================================================================
# core/client.py  —  Handwriting OCR HTTP client
# =============================================================================
#
# One method per remote endpoint.  Each method opens its own
# httpx.AsyncClient, performs exactly ONE request, and closes the client.
# There is no retry, no polling and no timeout override: the httpx defaults
# apply.
#
# Failures are NOT translated here.  Non-2xx responses raise
# httpx.HTTPStatusError (via raise_for_status) and transport problems raise
# other httpx.HTTPError subclasses; the dispatcher turns both into
# UpstreamError at a single boundary.
#
# ENDPOINTS:
#   POST {base}/documents            multipart upload      → JSON
#   GET  {base}/documents/{id}       document status       → JSON
#   GET  {base}/documents/{id}.txt   plain-text transcript → text
# =============================================================================

import logging
import mimetypes
from typing import Any, Optional
from urllib.parse import quote

import httpx

from core.config import API_BASE_URL

logger = logging.getLogger(__name__)


class HandwritingOCRClient:
    """Thin async wrapper over the Handwriting OCR v3 REST API."""

    def __init__(
        self,
        token: str,
        base_url: str = API_BASE_URL,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    def _headers(self, accept: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._token}",
            "Accept": accept,
        }

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=self._transport)

    async def create_document(self, file_name: str, content: bytes, fields: dict[str, str]) -> dict[str, Any]:
        """Upload a document for transcription and return the JSON body."""
        content_type = mimetypes.guess_type(file_name)[0] or "application/octet-stream"
        files = {"file": (file_name, content, content_type)}

        logger.debug("POST /documents file=%s bytes=%d fields=%s", file_name, len(content), fields)
        async with self._client() as client:
            response = await client.post(
                f"{self._base_url}/documents",
                files=files,
                data=fields,
                headers=self._headers("application/json"),
            )
            response.raise_for_status()
            return response.json()

    async def get_document(self, document_id: str) -> dict[str, Any]:
        """Fetch the status record of one document."""
        logger.debug("GET /documents/%s", document_id)
        async with self._client() as client:
            response = await client.get(
                f"{self._base_url}/documents/{_path_segment(document_id)}",
                headers=self._headers("application/json"),
            )
            response.raise_for_status()
            return response.json()

    async def get_document_text(self, document_id: str) -> str:
        """Fetch the plain-text export.  The body is returned as-is."""
        logger.debug("GET /documents/%s.txt", document_id)
        async with self._client() as client:
            response = await client.get(
                f"{self._base_url}/documents/{_path_segment(document_id)}.txt",
                headers=self._headers("text/plain"),
            )
            response.raise_for_status()
            return response.text


def _path_segment(document_id: str) -> str:
    # "/", "?" and "#" in an ID must stay inside the documents/{id} segment.
    return quote(document_id, safe="")
