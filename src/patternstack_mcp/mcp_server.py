"""MCP stdio server exposing the PatternStack semantic tools.

Run as: python -m patternstack_mcp.mcp_server  (or the ``patternstack-mcp`` script)
"""

import asyncio
import logging

from dotenv import load_dotenv
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, Resource, Tool

from patternstack_mcp import __version__
from patternstack_mcp.config import Settings, get_settings
from patternstack_mcp.dispatcher import Dispatcher

logger = logging.getLogger(__name__)

SERVER_NAME = "patternstack"


def create_server(settings: Settings, dispatcher: Dispatcher | None = None) -> Server:
    """Build the MCP server with tool and resource handlers bound to ``settings``."""
    if dispatcher is None:
        dispatcher = Dispatcher(settings)
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return dispatcher.list_tools()

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> CallToolResult:
        return await dispatcher.call_tool(name, arguments)

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return dispatcher.list_resources()

    @server.read_resource()
    async def read_resource(uri) -> list[ReadResourceContents]:
        doc, text = dispatcher.read_resource(str(uri))
        return [ReadResourceContents(content=text, mime_type=doc.mime_type)]

    return server


async def main(settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    dispatcher = Dispatcher(settings)
    server = create_server(settings, dispatcher)
    logger.info(
        "PatternStack MCP started (API %s, key %s)",
        settings.api_url,
        "configured" if settings.has_api_key else "not set",
    )
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await dispatcher.aclose()


def run() -> None:
    """Console entry point: load .env, configure logging, serve over stdio."""
    load_dotenv()
    settings = get_settings()
    # stdout carries the protocol; logging goes to stderr.
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    asyncio.run(main(settings))


if __name__ == "__main__":
    run()
