# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server for Handwriting OCR
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the three Handwriting OCR operations as MCP tools.  Each tool is
#   a thin wrapper around ToolDispatcher.call(): it logs the request,
#   delegates, logs the response, and converts dispatcher errors into MCP
#   tool errors.
#
# THE TOOLS:
#   upload_document  → create a document (remote mutation)
#   check_status     → read-only status lookup
#   get_text         → read-only plain-text transcript
#
#   There is no polling here.  Callers invoke check_status repeatedly until
#   the status is terminal ("processed", "completed" or "failed"), then
#   call get_text.
#
# RUNNING THIS SERVER:
#   a) Console script:  handwriting-ocr-mcp
#   b) Module:          python -m tools.mcp_server
#   c) Spawned over stdio by an MCP host (see agent/ocr_agent.py)
# =============================================================================

import json
import logging
import signal
import sys
from typing import Annotated, Any, Optional, Union

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from pydantic import Field

from core.config import load_config
from core.dispatcher import ToolDispatcher
from core.errors import OCRServerError
from core.models import DocumentText

SERVER_NAME = "handwriting-ocr"
SERVER_VERSION = "0.1.0"

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR: stdout carries the MCP JSON-RPC stream, and anything
# else written there corrupts the protocol.
#
# ANSI colors:  CYAN = requests,  GREEN = responses,  YELLOW = status,
#               RED = errors.
# =============================================================================

_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logging.getLogger("httpx").setLevel(logging.WARNING)


def _log_request(tool_name: str, **params) -> None:
    """Log an incoming tool call with its parameters in CYAN."""
    param_str = ", ".join(f"{k}={_summarize(v)!r}" for k, v in params.items())
    logging.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logging.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, result: Union[dict, DocumentText]) -> Union[dict, DocumentText]:
    """Log the tool response in GREEN, then return it."""
    if isinstance(result, dict):
        shown = json.dumps(result, separators=(",", ":"))
    else:
        shown = f"<{len(result.text)} chars of text for {result.id}>"
    logging.info(f"{_GREEN}  ← {tool_name} response: {shown}{_RESET}")
    return result


def _log_error(tool_name: str, error: Exception) -> None:
    logging.error(f"{_RED}  ✗ {tool_name} failed: {error}{_RESET}")


def _summarize(value: Any) -> Any:
    # Inline uploads can be megabytes; log the name and size only.
    if isinstance(value, dict) and "data" in value:
        data = value.get("data")
        size = len(data) if hasattr(data, "__len__") else "?"
        return {"name": value.get("name"), "data": f"<{size} items>"}
    return value


# =============================================================================
# Server factory
# =============================================================================
# The dispatcher is injected so tests can pass one built from a fake config
# and an httpx.MockTransport.  Without one, configuration comes from the
# process environment (loaded once, here).
# =============================================================================
def create_server(dispatcher: Optional[ToolDispatcher] = None) -> FastMCP:
    """Build the FastMCP server and register the three tools."""
    if dispatcher is None:
        dispatcher = ToolDispatcher(load_config())

    mcp = FastMCP(SERVER_NAME, version=SERVER_VERSION)

    async def _dispatch(tool_name: str, arguments: dict) -> Union[dict, DocumentText]:
        try:
            result = await dispatcher.call(tool_name, arguments)
        except OCRServerError as exc:
            _log_error(tool_name, exc)
            raise ToolError(str(exc)) from exc
        return _log_response(tool_name, result)

    # =========================================================================
    # TOOL 1: upload_document
    # =========================================================================
    @mcp.tool()
    async def upload_document(
        file: Annotated[
            Union[str, dict[str, Any]],
            Field(
                description=(
                    "Path to the document (PDF, JPG, PNG, etc.), or an inline "
                    'object {"data": ..., "name": "scan.png"} where data is a list '
                    'of byte values or a string (add "encoding": "base64" for base64).'
                )
            ),
        ],
        delete_after: Annotated[
            Optional[int], Field(description="Seconds until auto-deletion (optional)")
        ] = None,
        extractor_id: Annotated[
            Optional[str], Field(description="Extractor ID (required if action is extractor, will be ignored)")
        ] = None,
        prompt_id: Annotated[
            Optional[str], Field(description="Prompt ID (requires Enterprise subscription, will be ignored)")
        ] = None,
    ) -> dict:
        """Upload a document to Handwriting OCR API for transcription.

        Returns {"id", "status"}.  The document is processed asynchronously:
        call check_status with the returned id until the status is
        terminal ("processed", "completed" or "failed"), then call get_text.
        """
        _log_request(
            "upload_document",
            file=file,
            delete_after=delete_after,
            extractor_id=extractor_id,
            prompt_id=prompt_id,
        )
        return await _dispatch(
            "upload_document",
            {"file": file, "delete_after": delete_after, "extractor_id": extractor_id, "prompt_id": prompt_id},
        )

    # =========================================================================
    # TOOL 2: check_status
    # =========================================================================
    @mcp.tool()
    async def check_status(id: Annotated[str, Field(description="Document ID")]) -> dict:
        """Check the status of a document.

        Returns id, file_name, action, page_count, status, created_at and
        updated_at exactly as reported by the Handwriting OCR API.
        """
        _log_request("check_status", id=id)
        return await _dispatch("check_status", {"id": id})

    # =========================================================================
    # TOOL 3: get_text
    # =========================================================================
    @mcp.tool()
    async def get_text(id: Annotated[str, Field(description="Document ID")]) -> str:
        """Retrieve the transcribed text from a document."""
        _log_request("get_text", id=id)
        document = await _dispatch("get_text", {"id": id})
        return document.text

    _log_status(f"registered tools: {', '.join(dispatcher.tool_names)}")
    return mcp


# =============================================================================
# Server entry point
# =============================================================================
def _handle_sigterm(signum, frame) -> None:
    # Same shutdown path as Ctrl-C.
    raise KeyboardInterrupt


def main() -> None:
    """Run the server on stdio until interrupted."""
    load_dotenv()
    config = load_config()
    logging.getLogger().setLevel(config.log_level)
    if not config.api_token:
        _log_status("API_TOKEN is not set; every tool call will fail until it is configured")

    mcp = create_server(ToolDispatcher(config))
    signal.signal(signal.SIGTERM, _handle_sigterm)

    logging.info("Handwriting OCR MCP server running on stdio")
    try:
        mcp.run(transport="stdio")
    except KeyboardInterrupt:
        logging.info("Handwriting OCR MCP server shutting down")
    sys.exit(0)


if __name__ == "__main__":
    main()
