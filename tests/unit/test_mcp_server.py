"""Tests for the FastMCP wiring."""

from __future__ import annotations

import asyncio
import threading

from fastmcp import FastMCP
from mcp.types import TextContent

from core.dispatch import TOOLS, Success
from tests.conftest import LANDSCAPE_ID, ORGANIZATION_ID, VERSION_PATH
from tools.mcp_server import SERVER_NAME, create_server, register_tools


class TestRegisterTools:
    def test_every_tool_is_registered(self, dispatcher):
        tools = register_tools(FastMCP("test"), dispatcher)
        assert [tool.name for tool in tools] == [spec.name for spec in TOOLS]

    def test_parameters_use_camel_case(self, dispatcher):
        tools = {tool.name: tool for tool in register_tools(FastMCP("test"), dispatcher)}

        schema = tools["getModelObjects"].parameters

        assert schema["type"] == "object"
        assert "landscapeId" in schema["properties"]
        assert "parentId" in schema["properties"]
        assert "landscapeId" in schema["required"]

    def test_create_server(self, client, settings):
        assert create_server(settings, client).name == SERVER_NAME


class TestDispatchedTool:
    def _tool(self, dispatcher, name):
        return next(t for t in register_tools(FastMCP("test"), dispatcher) if t.name == name)

    def test_blocks_become_text_content(self, dispatcher, fake_api):
        fake_api.on("GET", f"/organizations/{ORGANIZATION_ID}/teams", json={"teams": [
            {"id": "t1", "name": "Core"},
            {"id": "t2", "name": "Platform"},
        ]})

        result = asyncio.run(self._tool(dispatcher, "getTeams").run({}))

        assert all(isinstance(item, TextContent) for item in result.content)
        assert [item.text.splitlines()[0] for item in result.content] == ["# Core", "# Platform"]

    def test_failures_are_returned_as_text(self, dispatcher, fake_api):
        fake_api.on("GET", f"{VERSION_PATH}/diagrams", status_code=500, text="boom")

        result = asyncio.run(self._tool(dispatcher, "getDiagrams").run({"landscapeId": LANDSCAPE_ID}))

        assert len(result.content) == 1
        assert result.content[0].text.startswith("Error getting diagrams: IcePanel API error: 500")

    def test_dispatcher_runs_off_the_event_loop_thread(self, dispatcher):
        tool = self._tool(dispatcher, "getLandscapes")
        seen = {}

        class RecordingDispatcher:
            def invoke(self, name, arguments):
                seen["thread"] = threading.get_ident()
                seen["call"] = (name, arguments)
                return Success(["ok"])

        tool._dispatcher = RecordingDispatcher()

        async def run_tool():
            seen["loop_thread"] = threading.get_ident()
            return await tool.run({})

        result = asyncio.run(run_tool())

        assert [item.text for item in result.content] == ["ok"]
        assert seen["call"] == ("getLandscapes", {})
        assert seen["thread"] != seen["loop_thread"]
