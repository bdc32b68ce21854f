"""PatternStack MCP server: semantic dependency and stack tools over MCP."""

__version__ = "2.0.0"
