"""Tests for patternstack_mcp.dispatcher module."""

from unittest.mock import AsyncMock

import httpx
import pytest

from patternstack_mcp.client import PatternStackClient
from patternstack_mcp.config import Settings
from patternstack_mcp.dispatcher import Dispatcher
from patternstack_mcp.errors import UnknownResourceError

API_KEY = "ps_test_secret_key"


def _dispatcher(handler, **settings):
    settings.setdefault("api_key", API_KEY)
    settings = Settings(**settings)
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return Dispatcher(settings, PatternStackClient(settings, http_client=http))


def _ok(result):
    return httpx.Response(200, json={"success": True, "result": result})


def test_list_tools_excludes_hidden():
    dispatcher = Dispatcher(Settings())
    tools = dispatcher.list_tools()
    names = [t.name for t in tools]
    assert "migration.plan" not in names
    assert len(names) == 10
    assert names[0] == "dependency.explain"


def test_list_tools_includes_schemas():
    tools = {t.name: t for t in Dispatcher(Settings()).list_tools()}
    schema = tools["dependency.health"].inputSchema
    assert schema["required"] == ["package"]
    assert tools["signals.evaluate"].description == "Get reward signal for add/remove/upgrade/replace actions"


async def test_call_tool_formats_result():
    result = {
        "status": "healthy",
        "deprecated": False,
        "securityIssues": [],
        "_agi": {"safe": True, "action": "proceed"},
    }
    dispatcher = _dispatcher(lambda request: _ok(result))
    response = await dispatcher.call_tool("dependency.health", {"package": "lodash"})
    assert not response.isError
    assert len(response.content) == 1
    text = response.content[0].text
    assert text.startswith("# Health Check")
    assert "**Action**: proceed" in text
    assert "## AGI Guidance" in text


async def test_call_unknown_tool():
    calls = []

    def handler(request):
        calls.append(request)
        return _ok({})

    dispatcher = _dispatcher(handler)
    response = await dispatcher.call_tool("dependency.magic", {})
    assert response.isError is True
    assert response.content[0].text == "Error: Unknown tool: dependency.magic"
    assert calls == []


async def test_call_without_api_key():
    dispatcher = _dispatcher(lambda request: _ok({}), api_key="")
    response = await dispatcher.call_tool("stack.validate", {"packages": ["react"]})
    assert response.isError is True
    assert "PATTERNSTACK_API_KEY not set" in response.content[0].text


async def test_call_hidden_tool_succeeds():
    plan = {
        "migration": {
            "from": {"package": "moment"},
            "to": {"package": "date-fns"},
            "summary": "Swap formatting helpers.",
            "difficulty": "medium",
        },
        "impact": {"estimatedFiles": 12, "breakingChanges": 3},
        "steps": [{"order": 1, "type": "install", "description": "Add date-fns", "automated": True}],
    }
    dispatcher = _dispatcher(lambda request: _ok(plan))
    response = await dispatcher.call_tool("migration.plan", {"from": "moment", "to": "date-fns"})
    assert not response.isError
    assert response.content[0].text.startswith("# Migration Plan")


async def test_upstream_error_becomes_error_result():
    dispatcher = _dispatcher(
        lambda request: httpx.Response(200, json={"success": False, "error": {"message": "Package not found"}})
    )
    response = await dispatcher.call_tool("dependency.health", {"package": "nope"})
    assert response.isError is True
    assert response.content[0].text == "Error: Package not found"


async def test_transport_error_never_leaks_key():
    def handler(request):
        raise httpx.ConnectError("connection refused")

    dispatcher = _dispatcher(handler)
    response = await dispatcher.call_tool("dependency.health", {"package": "x"})
    assert response.isError is True
    assert API_KEY not in response.content[0].text
    assert "\n" not in response.content[0].text


async def test_unexpected_exception_is_contained():
    client = AsyncMock()
    client.call_tool.side_effect = RuntimeError("boom")
    dispatcher = Dispatcher(Settings(api_key=API_KEY), client)
    response = await dispatcher.call_tool("dependency.health", {"package": "x"})
    assert response.isError is True
    assert response.content[0].text == "Error: boom"


async def test_none_arguments_sent_as_empty_object():
    client = AsyncMock()
    client.call_tool.return_value = {}
    dispatcher = Dispatcher(Settings(api_key=API_KEY), client)
    await dispatcher.call_tool("made.up", None)
    client.call_tool.assert_awaited_once_with("made.up", {})


def test_list_resources():
    resources = Dispatcher(Settings()).list_resources()
    assert [str(r.uri) for r in resources] == [
        "patternstack://overview",
        "patternstack://tools",
        "patternstack://config",
    ]
    assert resources[2].mimeType == "text/plain"


def test_read_resource_uses_dispatcher_settings():
    dispatcher = Dispatcher(Settings(api_key=API_KEY, api_url="http://localhost:3000"))
    doc, text = dispatcher.read_resource("patternstack://config")
    assert doc.mime_type == "text/plain"
    assert "API Key: Configured" in text
    assert "API URL: http://localhost:3000" in text
    assert API_KEY not in text


def test_read_unknown_resource_raises():
    with pytest.raises(UnknownResourceError, match="Unknown resource: patternstack://secrets"):
        Dispatcher(Settings()).read_resource("patternstack://secrets")


async def test_aclose_closes_client():
    client = AsyncMock()
    dispatcher = Dispatcher(Settings(), client)
    await dispatcher.aclose()
    client.aclose.assert_awaited_once()


async def test_hidden_tool_input_is_validated():
    calls = []

    def handler(request):
        calls.append(request)
        return _ok({})

    dispatcher = _dispatcher(handler)
    response = await dispatcher.call_tool("migration.plan", {"ecosystem": "cobol"})
    assert response.isError is True
    assert response.content[0].text.startswith("Error: Input validation error:")
    assert calls == []


async def test_hidden_tool_unknown_ecosystem_rejected():
    calls = []

    def handler(request):
        calls.append(request)
        return _ok({})

    dispatcher = _dispatcher(handler)
    response = await dispatcher.call_tool(
        "migration.plan", {"from": "moment", "to": "dayjs", "ecosystem": "cobol"}
    )
    assert response.isError is True
    assert "'cobol' is not one of" in response.content[0].text
    assert calls == []


async def test_invalid_input_rejected_before_credential_check():
    dispatcher = _dispatcher(lambda request: _ok({}), api_key="")
    response = await dispatcher.call_tool("signals.evaluate", {"action": "delete"})
    assert response.isError is True
    assert "Input validation error" in response.content[0].text
