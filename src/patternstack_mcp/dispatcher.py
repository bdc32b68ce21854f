"""Binds the registry, upstream client, formatter and resources to MCP types."""

import logging

from mcp.types import CallToolResult, Resource, TextContent, Tool

from patternstack_mcp.client import PatternStackClient
from patternstack_mcp.config import Settings
from patternstack_mcp.errors import PatternStackError
from patternstack_mcp.formatter import format_result
from patternstack_mcp.resources import RESOURCES, ResourceDoc, get_resource_doc
from patternstack_mcp.tools.registry import is_known_tool, list_tools
from patternstack_mcp.tools.schemas import get_input_schema, validate_input

logger = logging.getLogger(__name__)


def _text_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(content=[TextContent(type="text", text=text)], isError=is_error)


class Dispatcher:
    def __init__(self, settings: Settings, client: PatternStackClient | None = None) -> None:
        self._settings = settings
        self._client = client or PatternStackClient(settings)

    @property
    def settings(self) -> Settings:
        return self._settings

    def list_tools(self) -> list[Tool]:
        """Visible tools with their input schemas, in registry order."""
        return [
            Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=get_input_schema(tool.name),
            )
            for tool in list_tools()
        ]

    async def call_tool(self, name: str, arguments: dict | None) -> CallToolResult:
        """Invoke a tool and render its result; failures become error results."""
        arguments = arguments or {}
        try:
            # Hidden tools are not in the protocol layer's schema cache.
            if is_known_tool(name):
                validate_input(name, arguments)
            result = await self._client.call_tool(name, arguments)
            return _text_result(format_result(name, result))
        except PatternStackError as e:
            logger.info("Tool %s failed: %s", name, e)
            return _text_result(f"Error: {e}", is_error=True)
        except Exception as e:
            logger.exception("Tool %s failed unexpectedly", name)
            return _text_result(f"Error: {str(e) or type(e).__name__}", is_error=True)

    def list_resources(self) -> list[Resource]:
        return [
            Resource(
                uri=doc.uri,
                name=doc.name,
                description=doc.description,
                mimeType=doc.mime_type,
            )
            for doc in RESOURCES
        ]

    def read_resource(self, uri: str) -> tuple[ResourceDoc, str]:
        """Return the document and its freshly rendered content."""
        doc = get_resource_doc(uri)
        return doc, doc.render(self._settings)

    async def aclose(self) -> None:
        await self._client.aclose()
