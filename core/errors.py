# =============================================================================
# core/errors.py  —  Error taxonomy for tool calls
# =============================================================================
#
# Every failure a tool call can produce is one of the four classes below.
# The dispatcher raises them; the MCP layer (tools/mcp_server.py) converts
# them into protocol errors with the same message.
#
#   ConfigurationError  →  API_TOKEN missing (fails before any network call)
#   ArgumentError       →  required argument absent or unusable (no network)
#   UpstreamError       →  transport failure or non-2xx response from the API
#   UnknownToolError    →  tool name not registered
# =============================================================================

from typing import Optional

import httpx

UPSTREAM_ERROR_PREFIX = "Handwriting OCR API error"


class OCRServerError(Exception):
    """Base class for every error surfaced to the tool caller."""


class ConfigurationError(OCRServerError):
    """The process configuration is unusable (missing credential)."""


class ArgumentError(OCRServerError):
    """A tool argument is missing or cannot be used."""


class UnknownToolError(OCRServerError):
    """The requested tool name is not registered."""

    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class UpstreamError(OCRServerError):
    """The remote API call failed.

    The message always starts with ``UPSTREAM_ERROR_PREFIX`` so callers see
    identical formatting for all three tools.
    """

    def __init__(self, detail: str, status_code: Optional[int] = None):
        super().__init__(f"{UPSTREAM_ERROR_PREFIX}: {detail}")
        self.detail = detail
        self.status_code = status_code

    @classmethod
    def from_http_error(cls, exc: httpx.HTTPError) -> "UpstreamError":
        """Build an UpstreamError from any httpx failure.

        For status errors the remote service's own error text is kept, so an
        unknown document ID surfaces as e.g.
        ``Handwriting OCR API error: HTTP 404: Document not found``.
        """
        if isinstance(exc, httpx.HTTPStatusError):
            response = exc.response
            remote_text = _remote_error_text(response)
            detail = f"HTTP {response.status_code}"
            if remote_text:
                detail = f"{detail}: {remote_text}"
            return cls(detail, status_code=response.status_code)
        return cls(str(exc) or exc.__class__.__name__)


def _remote_error_text(response: httpx.Response) -> str:
    """Pull the error message out of an error response body."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()

    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return response.text.strip()
