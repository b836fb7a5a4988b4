# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains the Handwriting OCR logic: data models, configuration,
# error types, the HTTP client for the remote API, and the Tool Dispatcher.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, Google ADK, or any orchestration
#   framework.  The only third-party import is httpx (the HTTP transport).
#   tools/ wraps the dispatcher in MCP tools; agent/ drives those tools.
# =============================================================================
