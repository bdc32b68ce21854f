"""Tests for patternstack_mcp.tools.registry module."""

import dataclasses

import pytest

from patternstack_mcp.tools.registry import (
    HIDDEN_TOOLS,
    TOOL_CONFIG,
    Tier,
    ToolDescriptor,
    get_tool,
    is_known_tool,
    list_tools,
)

EXPECTED_TOOLS = [
    "dependency.explain",
    "dependency.health",
    "dependency.alternatives",
    "dependency.trends",
    "dependency.safe-upgrade",
    "stack.recommend",
    "stack.validate",
    "stack.defaults",
    "migration.plan",
    "architecture.evaluate",
    "signals.evaluate",
]


def test_all_tools_registered_in_order():
    assert list(TOOL_CONFIG) == EXPECTED_TOOLS


def test_descriptor_names_match_keys():
    for name, tool in TOOL_CONFIG.items():
        assert tool.name == name


def test_weights_and_timeouts_in_range():
    for tool in TOOL_CONFIG.values():
        assert 1 <= tool.weight <= 5
        assert 5000 <= tool.timeout_ms <= 45000
        assert tool.min_tier is Tier.FREE


def test_specific_metadata():
    tool = get_tool("architecture.evaluate")
    assert tool.weight == 5
    assert tool.timeout_ms == 45000
    assert tool.timeout == 45.0
    assert get_tool("dependency.health").timeout == 5.0
    assert get_tool("migration.plan").weight == 3


def test_get_unknown_tool():
    assert get_tool("dependency.nope") is None
    assert is_known_tool("dependency.nope") is False
    assert is_known_tool("stack.validate") is True


def test_list_tools_hides_migration_plan():
    names = [t.name for t in list_tools()]
    assert "migration.plan" not in names
    assert len(names) == len(EXPECTED_TOOLS) - len(HIDDEN_TOOLS)


def test_list_tools_include_hidden():
    names = [t.name for t in list_tools(include_hidden=True)]
    assert names == EXPECTED_TOOLS


def test_hidden_tool_still_known():
    for name in HIDDEN_TOOLS:
        assert is_known_tool(name)


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        TOOL_CONFIG["extra.tool"] = get_tool("stack.validate")  # type: ignore[index]


def test_descriptor_is_frozen():
    tool = get_tool("stack.validate")
    with pytest.raises(dataclasses.FrozenInstanceError):
        tool.weight = 10  # type: ignore[misc]


@pytest.mark.parametrize("weight,timeout_ms", [(0, 1000), (1, 0), (-1, 1000)])
def test_descriptor_rejects_non_positive_values(weight, timeout_ms):
    with pytest.raises(ValueError):
        ToolDescriptor(name="x.y", description="d", weight=weight, timeout_ms=timeout_ms)
