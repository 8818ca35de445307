# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes every tool in core.dispatch.TOOLS over MCP.  Each tool is a thin
#   wrapper: it hands the raw arguments to the ToolDispatcher and returns
#   the text blocks it gets back.
#
# HOW IT WORKS (the flow):
#   1. The MCP client calls a tool by name (e.g. "getModelObjects")
#   2. FastMCP routes the call to the matching DispatchedTool below
#   3. The dispatcher validates the arguments, calls IcePanel, renders text
#   4. Each text block becomes one TextContent item in the response
#
# WHY NOT @mcp.tool() FUNCTIONS?
#   A decorated function only sees its parameters after FastMCP has filled
#   in defaults, so "parentId left out" and "parentId: null" look the same.
#   IcePanel filters treat those differently.  DispatchedTool receives the
#   arguments exactly as sent and lets the pydantic schema in core/schemas.py
#   do the validation.
#
# ERRORS:
#   A failed tool call is still a normal response whose text explains the
#   failure.  Nothing raised inside core/ reaches the MCP transport.
# =============================================================================

import asyncio
import logging
from typing import Any

from fastmcp import FastMCP
from fastmcp.tools import Tool
from fastmcp.tools.tool import ToolResult
from mcp.types import TextContent
from pydantic import PrivateAttr

from core.config import Settings
from core.dispatch import Failure, ToolDispatcher, ToolSpec
from core.icepanel import IcePanelClient

logger = logging.getLogger(__name__)

SERVER_NAME = "IcePanel MCP Server"

# =============================================================================
# Logging helpers
# =============================================================================
# Logs go to STDERR (configured in main.py): STDOUT carries the MCP protocol
# and any stray output there would corrupt the message stream.
#
# ANSI colours:
#   - CYAN   incoming tool calls
#   - YELLOW failures
#   - GREEN  responses
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RESET = "\033[0m"

_PREVIEW_LENGTH = 300


def _log_request(tool_name: str, arguments: dict[str, Any]) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    param_str = ", ".join(f"{k}={v!r}" for k, v in arguments.items())
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, blocks: list[str]) -> None:
    """Log a short preview of the response in GREEN."""
    preview = " | ".join(blocks)
    if len(preview) > _PREVIEW_LENGTH:
        preview = preview[:_PREVIEW_LENGTH] + "…"
    logger.info(f"{_GREEN}  ← {tool_name} returned {len(blocks)} block(s): {preview!r}{_RESET}")


# =============================================================================
# DispatchedTool — one MCP tool backed by the dispatcher
# =============================================================================
class DispatchedTool(Tool):
    """An MCP tool whose arguments go straight to ToolDispatcher.invoke()."""

    _dispatcher: ToolDispatcher = PrivateAttr()

    @classmethod
    def from_spec(cls, spec: ToolSpec, dispatcher: ToolDispatcher) -> "DispatchedTool":
        tool = cls(
            name=spec.name,
            description=spec.description.strip(),
            parameters=spec.arguments.json_schema(),
        )
        tool._dispatcher = dispatcher
        return tool

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        _log_request(self.name, arguments or {})

        # the dispatcher blocks on HTTP; keep it off the event loop
        loop = asyncio.get_running_loop()
        outcome = await loop.run_in_executor(None, self._dispatcher.invoke, self.name, arguments)
        if isinstance(outcome, Failure):
            _log_status(outcome.message)

        _log_response(self.name, outcome.blocks)
        return ToolResult(
            content=[TextContent(type="text", text=block) for block in outcome.blocks]
        )


def register_tools(mcp: FastMCP, dispatcher: ToolDispatcher) -> list[DispatchedTool]:
    """Add one DispatchedTool per registered tool spec."""
    registered = []
    for spec in dispatcher.tools:
        tool = DispatchedTool.from_spec(spec, dispatcher)
        mcp.add_tool(tool)
        registered.append(tool)
    logger.info("Registered %d IcePanel tools", len(registered))
    return registered


def create_server(settings: Settings, client: IcePanelClient) -> FastMCP:
    """Build the FastMCP server with every IcePanel tool registered."""
    mcp = FastMCP(SERVER_NAME)
    register_tools(mcp, ToolDispatcher(client, settings))
    return mcp
