"""PatternStack REST client: one authenticated POST per tool call."""

import asyncio
import logging
from typing import Any

import httpx

from patternstack_mcp.config import Settings
from patternstack_mcp.errors import (
    WORKSPACE_KEY_MESSAGE,
    ConfigurationError,
    TransportError,
    UnknownToolError,
    UpstreamError,
    UpstreamTimeoutError,
)
from patternstack_mcp.tools.registry import get_tool

logger = logging.getLogger(__name__)

TOOLS_CALL_PATH = "/api/mcp/tools/call"
CLERK_USER_HEADER = "x-clerk-user-id"


def _error_message(body: Any) -> str | None:
    """Extract ``error.message`` from an API error body."""
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict):
        message = error.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class PatternStackClient:
    """Forwards tool invocations to the PatternStack API.

    No retries are performed: each call is a single attempt bounded by the
    tool's timeout from the registry. Callers that want a retry policy wrap
    this client.
    """

    def __init__(self, settings: Settings, http_client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._owns_client = http_client is None
        # Deadlines come from the registry, so the transport itself has none.
        self._client = http_client or httpx.AsyncClient(timeout=None)

    @property
    def url(self) -> str:
        return f"{self._settings.api_url}{TOOLS_CALL_PATH}"

    def _headers(self) -> dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self._settings.api_key}",
        }
        if self._settings.clerk_user_id:
            headers[CLERK_USER_HEADER] = self._settings.clerk_user_id
        return headers

    async def call_tool(self, tool: str, input: dict) -> Any:
        """Invoke ``tool`` upstream and return the unwrapped ``result`` payload."""
        descriptor = get_tool(tool)
        if descriptor is None:
            raise UnknownToolError(tool)
        if not self._settings.has_api_key:
            raise ConfigurationError()

        logger.debug("Calling %s (timeout %gs)", tool, descriptor.timeout)
        try:
            response = await asyncio.wait_for(
                self._client.post(
                    self.url,
                    json={"tool": tool, "input": input},
                    headers=self._headers(),
                    timeout=descriptor.timeout,
                ),
                timeout=descriptor.timeout,
            )
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning("Tool %s timed out after %gs", tool, descriptor.timeout)
            raise UpstreamTimeoutError(tool, descriptor.timeout, e) from e
        except httpx.HTTPError as e:
            logger.warning("Tool %s request failed: %s", tool, type(e).__name__)
            raise TransportError(tool, e) from e

        return self._unwrap(tool, response)

    def _unwrap(self, tool: str, response: httpx.Response) -> Any:
        status = response.status_code
        if not response.is_success:
            try:
                message = _error_message(response.json())
            except ValueError:
                message = response.reason_phrase or None
            logger.warning("PatternStack API rejected %s with HTTP %d", tool, status)
            if status == 400 and message and CLERK_USER_HEADER in message:
                raise UpstreamError(WORKSPACE_KEY_MESSAGE, status)
            raise UpstreamError(message or f"API error: {status}", status)

        try:
            payload = response.json()
        except ValueError as e:
            raise UpstreamError("Invalid JSON response from PatternStack API", status) from e

        if not isinstance(payload, dict) or not payload.get("success"):
            logger.warning("Tool %s reported failure", tool)
            raise UpstreamError(_error_message(payload) or "Tool execution failed")
        return payload.get("result")

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
