# =============================================================================
# tools/__init__.py
# =============================================================================
# This package contains the FastMCP wiring.
#
# ARCHITECTURAL ROLE:
#   tools/ is the translation layer between MCP and core/.  It:
#     1. Turns every entry of core.dispatch.TOOLS into an MCP tool
#     2. Publishes the pydantic argument schema as the tool's parameters
#     3. Sends the dispatcher's text blocks back as TextContent items
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT validate arguments or call IcePanel (that's core/)
#   - They do NOT raise; every outcome is returned as text
# =============================================================================
