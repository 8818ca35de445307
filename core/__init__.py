# =============================================================================
# core/__init__.py
# =============================================================================
# This package contains ALL the logic for the IcePanel MCP server: the API
# client, the filter encoder, fuzzy search, renderers, argument schemas,
# tool handlers and the dispatcher that ties them together.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP.  The MCP wiring lives in
#   tools/; everything here can be driven directly from a test or a REPL by
#   calling ToolDispatcher.invoke(name, arguments).
# =============================================================================
