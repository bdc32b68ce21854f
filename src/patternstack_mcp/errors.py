"""Error types raised while dispatching tool calls and reading resources."""

from patternstack_mcp.config import KEYS_URL

WORKSPACE_KEY_MESSAGE = (
    "Workspace-scoped API key requires PATTERNSTACK_CLERK_USER_ID. "
    "Re-copy your MCP config from the dashboard in workspace mode."
)


class PatternStackError(Exception):
    """Base class for all adapter failures."""


class UnknownToolError(PatternStackError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class ConfigurationError(PatternStackError):
    """Raised when the API key is missing, before any network call."""

    def __init__(self, message: str | None = None) -> None:
        super().__init__(
            message or f"PATTERNSTACK_API_KEY not set. Get your key at {KEYS_URL}"
        )


class TransportError(PatternStackError):
    """The upstream API could not be reached."""

    def __init__(self, tool: str, cause: Exception, message: str | None = None) -> None:
        self.tool = tool
        self.cause = cause
        if message is None:
            detail = str(cause) or type(cause).__name__
            message = f"Request to PatternStack API failed: {detail}"
        super().__init__(message)


class UpstreamTimeoutError(TransportError):
    def __init__(self, tool: str, timeout: float, cause: Exception) -> None:
        self.timeout = timeout
        super().__init__(tool, cause, f"{tool} timed out after {timeout:g}s")


class UpstreamError(PatternStackError):
    """The upstream API answered but rejected the call.

    ``status`` is the HTTP status for HTTP-level rejections and ``None`` when
    the API answered 2xx with ``success: false``.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)


class UnknownResourceError(PatternStackError):
    def __init__(self, uri: str) -> None:
        self.uri = uri
        super().__init__(f"Unknown resource: {uri}")


class InputValidationError(PatternStackError):
    """Tool arguments do not match the tool's input schema."""

    def __init__(self, tool: str, detail: str) -> None:
        self.tool = tool
        super().__init__(f"Input validation error: {detail}")
