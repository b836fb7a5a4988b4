# =============================================================================
# core/dispatcher.py  —  The Tool Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Routes a named tool call with an argument bag to the right remote API
#   request and shapes the result.  Every call is independent: one request
#   in, one HTTP request out, one result (or one error) back.
#
# ORDER OF CHECKS (for every call):
#   1. Tool name known?          no  → UnknownToolError
#   2. API token configured?     no  → ConfigurationError
#   3. Required arguments valid? no  → ArgumentError
#   4. HTTP request              fail → UpstreamError
#   Steps 1-3 never touch the network.
#
# ERROR BOUNDARY:
#   call() is the only place where httpx failures become UpstreamError, so
#   all three tools share the same "Handwriting OCR API error: ..." format.
# =============================================================================

import json
import logging
from dataclasses import asdict
from typing import Any, Awaitable, Callable, Mapping, Optional, Union

import httpx

from core.client import HandwritingOCRClient
from core.config import OCRConfig
from core.errors import ArgumentError, UnknownToolError, UpstreamError
from core.models import DocumentStatus, DocumentText, UploadRequest, UploadResult, read_source

logger = logging.getLogger(__name__)

ToolResult = Union[dict[str, Any], DocumentText]


class ToolDispatcher:
    """Maps tool invocations onto Handwriting OCR API calls."""

    def __init__(self, config: OCRConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self._config = config
        self._transport = transport
        self._handlers: dict[str, Callable[[HandwritingOCRClient, Mapping[str, Any]], Awaitable[ToolResult]]] = {
            "upload_document": self._upload_document,
            "check_status": self._check_status,
            "get_text": self._get_text,
        }

    @property
    def config(self) -> OCRConfig:
        return self._config

    @property
    def tool_names(self) -> list[str]:
        return list(self._handlers)

    async def call(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Run one tool call and return its result.

        Raises UnknownToolError, ConfigurationError, ArgumentError or
        UpstreamError.  Nothing is retried.
        """
        handler = self._handlers.get(name)
        if handler is None:
            raise UnknownToolError(name)

        token = self._config.require_token()
        client = HandwritingOCRClient(token, base_url=self._config.base_url, transport=self._transport)

        try:
            return await handler(client, arguments or {})
        except httpx.HTTPError as exc:
            logger.error("[API Error] %s: %r", name, exc)
            raise UpstreamError.from_http_error(exc) from exc
        except json.JSONDecodeError as exc:
            logger.error("[API Error] %s: malformed JSON response: %s", name, exc)
            raise UpstreamError(f"malformed JSON response ({exc.msg})") from exc

    # -------------------------------------------------------------------------
    # Convenience wrappers, one per tool
    # -------------------------------------------------------------------------
    async def upload_document(
        self,
        file: Any,
        delete_after: Optional[int] = None,
        extractor_id: Optional[str] = None,
        prompt_id: Optional[str] = None,
    ) -> dict[str, Any]:
        return await self.call(
            "upload_document",
            {"file": file, "delete_after": delete_after, "extractor_id": extractor_id, "prompt_id": prompt_id},
        )

    async def check_status(self, id: str) -> dict[str, Any]:
        return await self.call("check_status", {"id": id})

    async def get_text(self, id: str) -> str:
        document = await self.call("get_text", {"id": id})
        return document.text

    # -------------------------------------------------------------------------
    # Handlers
    # -------------------------------------------------------------------------
    async def _upload_document(self, client: HandwritingOCRClient, arguments: Mapping[str, Any]) -> dict[str, Any]:
        request = UploadRequest.from_arguments(
            file=arguments.get("file"),
            delete_after=arguments.get("delete_after"),
            extractor_id=arguments.get("extractor_id"),
            prompt_id=arguments.get("prompt_id"),
        )
        if request.extractor_id or request.prompt_id:
            logger.info("extractor_id/prompt_id are not forwarded to the API and will be ignored")

        file_name, content = read_source(request.source)
        body = _expect_object(await client.create_document(file_name, content, request.form_fields()))
        result = UploadResult(id=body.get("id"), status=body.get("status"))
        return asdict(result)

    async def _check_status(self, client: HandwritingOCRClient, arguments: Mapping[str, Any]) -> dict[str, Any]:
        document_id = _require_document_id(arguments)
        body = _expect_object(await client.get_document(document_id))
        status = DocumentStatus.from_response(body)
        logger.debug("document %s status=%s terminal=%s", document_id, status.status, status.is_terminal)
        return asdict(status)

    async def _get_text(self, client: HandwritingOCRClient, arguments: Mapping[str, Any]) -> DocumentText:
        document_id = _require_document_id(arguments)
        text = await client.get_document_text(document_id)
        return DocumentText(id=document_id, text=text)


def _require_document_id(arguments: Mapping[str, Any]) -> str:
    value = arguments.get("id")
    if value is None or isinstance(value, bool):
        raise ArgumentError("Document ID is required")
    document_id = str(value).strip()
    if not document_id:
        raise ArgumentError("Document ID is required")
    if document_id in (".", ".."):
        raise ArgumentError(f"Invalid document ID: {document_id}")
    return document_id


def _expect_object(body: Any) -> dict[str, Any]:
    if not isinstance(body, dict):
        logger.error("[API Error] expected a JSON object, got %s", type(body).__name__)
        raise UpstreamError(f"unexpected response body (expected a JSON object, got {type(body).__name__})")
    return body
