# =============================================================================
# agent/__init__.py
# =============================================================================
# This package contains the Google ADK agent that drives the Handwriting OCR
# MCP server: an interactive transcription assistant.
#
# ARCHITECTURAL ROLE:
#   The agent is an MCP HOST.  It spawns tools/mcp_server.py over stdio and
#   lets the LLM decide when to call upload_document, check_status and
#   get_text.  Polling until a terminal status happens here, in the agent's
#   reasoning loop, and never inside the server.
#
# WHAT THE AGENT IS NOT:
#   - It does NOT talk to the Handwriting OCR API directly
#   - It does NOT read API_TOKEN itself; it forwards it to the server process
# =============================================================================
