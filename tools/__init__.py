# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP server that exposes the Handwriting OCR
# operations as MCP tools.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between the MCP protocol and core/.
#     1. Declares each tool's name, description and typed parameters
#     2. Delegates the call to core.dispatcher.ToolDispatcher
#     3. Converts core errors into MCP tool errors
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT build HTTP requests (core/client.py does)
#   - They do NOT validate arguments beyond the schema (the dispatcher does)
#   - They do NOT poll; polling is the MCP client's job
# =============================================================================
