"""MCP server exposing the OSSInsight operations as tools."""

from __future__ import annotations

import logging
from typing import Any

import mcp.server.stdio
import mcp.types as types
from mcp.server import Server

from ossinsight_mcp.registry import OperationRegistry

logger = logging.getLogger(__name__)

SERVER_NAME = "ossinsight-mcp-server"
SERVER_VERSION = "0.1.0"


def build_server(registry: OperationRegistry) -> Server:
    """Create an MCP server whose tools are the registry's operations.

    Arguments are validated by the registry, so the SDK's own input
    validation is switched off. Errors raised by an operation are reported
    to the client as an error result.

    The SDK hands the handler ``arguments or {}``, so a tools/call without
    arguments reaches the registry as an empty mapping and never raises
    MissingArgumentsError. Only direct ``registry.call`` callers can hit it.

    Uses the mcp 1.x decorator API (``list_tools``/``call_tool``), which
    mcp 2 removed; the dependency is pinned below 2 accordingly.
    """
    server: Server = Server(SERVER_NAME, version=SERVER_VERSION)

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(
                name=op.name,
                description=op.description,
                inputSchema=op.input_schema,
            )
            for op in registry.list_operations()
        ]

    @server.call_tool(validate_input=False)
    async def handle_call_tool(
        name: str, arguments: dict[str, Any] | None
    ) -> list[types.TextContent]:
        text = await registry.invoke(name, arguments)
        return [types.TextContent(type="text", text=text)]

    return server


async def serve(registry: OperationRegistry) -> None:
    """Run the MCP server on stdin/stdout until the client disconnects."""
    server = build_server(registry)
    async with mcp.server.stdio.stdio_server() as (read_stream, write_stream):
        logger.info("OSSInsight MCP Server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
