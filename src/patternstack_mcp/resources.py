"""Documentation resources served over MCP.

Content is rendered on every read from the tool registry and the current
settings; nothing is cached.
"""

from collections.abc import Callable
from dataclasses import dataclass

from patternstack_mcp.config import DEFAULT_API_URL, KEYS_URL, Settings
from patternstack_mcp.errors import UnknownResourceError
from patternstack_mcp.tools.registry import TOOL_CONFIG

# Tool -> (Free, Workspace, Premium) access as shown in the overview.
TIER_ACCESS: list[tuple[str, str, str, str]] = [
    ("dependency.health", "Preview", "Yes", "Yes"),
    ("stack.defaults", "-", "Yes", "Yes"),
    ("dependency.explain", "Preview", "Yes", "Yes"),
    ("dependency.alternatives", "-", "Yes", "Yes"),
    ("dependency.trends", "Preview", "Yes", "Yes"),
    ("stack.recommend", "-", "Yes", "Yes"),
    ("stack.validate", "Preview", "Yes", "Yes"),
    ("migration.plan", "-", "-", "Yes"),
    ("dependency.safe-upgrade", "-", "-", "Yes"),
    ("architecture.evaluate", "-", "-", "Yes"),
    ("signals.evaluate", "-", "-", "Yes"),
]


def _configured(flag: bool) -> str:
    return "Configured" if flag else "Not set"


def get_overview_doc(settings: Settings) -> str:
    matrix = "\n".join(
        f"| {tool} | {free} | {workspace} | {premium} |"
        for tool, free, workspace, premium in TIER_ACCESS
    )
    return f"""# 🪸 PatternStack MCP

## Agent-Optimized Semantic Tool Layer

PatternStack MCP provides semantic tools designed for AGI reasoning:

### Tool Namespaces

- **dependency.*** - Package-level intelligence
- **stack.*** - Stack generation and validation
- **migration.*** - Migration planning with action graphs
- **architecture.*** - Architecture evaluation and grading
- **signals.*** - Reinforcement learning signals

### Key Features

1. **AGI-Ready Responses** - Every tool returns an `_agi` block with:
   - Confidence scores
   - Clear recommendations (proceed/caution/avoid)
   - Actionable next steps

2. **Usage Limits** - Tools are gated by tier with rate limits and daily usage caps.

3. **Safety Middleware** - Built-in protection:
   - Tier gating
   - Rate limiting
   - Input validation
   - Prompt injection detection

### Tiers

Free access is preview-only (summary + single risk). Full depth requires Workspace or Premium.

| Tool | Free | Workspace | Premium |
|------|------|-----------|---------|
{matrix}

Get your API key at: {KEYS_URL}
"""


def get_tools_doc(settings: Settings) -> str:
    doc = "# MCP Tool Reference\n\n"
    for name, tool in TOOL_CONFIG.items():
        doc += f"## {name}\n\n"
        doc += f"{tool.description}\n\n"
        doc += f"- **Complexity Weight**: {tool.weight}\n"
        doc += f"- **Timeout**: {tool.timeout:g}s\n"
        doc += f"- **Minimum Tier**: {tool.min_tier.value}\n\n"
        doc += "---\n\n"
    return doc


def get_config_doc(settings: Settings) -> str:
    return f"""# PatternStack Configuration

API Key: {_configured(settings.has_api_key)}
API URL: {settings.api_url}
Workspace User: {_configured(bool(settings.clerk_user_id))}

## Setup

1. Get API key from {KEYS_URL}
2. Set PATTERNSTACK_API_KEY environment variable
3. Start the MCP server

## Environment Variables

- PATTERNSTACK_API_KEY - Your API key (required)
- PATTERNSTACK_API_URL - API URL (default: {DEFAULT_API_URL})
- PATTERNSTACK_CLERK_USER_ID - Workspace user ID (required for workspace-scoped keys)
- PATTERNSTACK_LOG_LEVEL - Log level (default: INFO)
"""


@dataclass(frozen=True)
class ResourceDoc:
    uri: str
    name: str
    description: str
    mime_type: str
    render: Callable[[Settings], str]


RESOURCES: list[ResourceDoc] = [
    ResourceDoc(
        uri="patternstack://overview",
        name="MCP Overview",
        description="PatternStack MCP architecture and tool reference",
        mime_type="text/markdown",
        render=get_overview_doc,
    ),
    ResourceDoc(
        uri="patternstack://tools",
        name="Tool Reference",
        description="Detailed reference for all MCP tools",
        mime_type="text/markdown",
        render=get_tools_doc,
    ),
    ResourceDoc(
        uri="patternstack://config",
        name="Configuration",
        description="Current configuration and API key status",
        mime_type="text/plain",
        render=get_config_doc,
    ),
]

_BY_URI = {doc.uri: doc for doc in RESOURCES}


def get_resource_doc(uri: str) -> ResourceDoc:
    doc = _BY_URI.get(uri)
    if doc is None:
        raise UnknownResourceError(uri)
    return doc


def get_resource(uri: str, settings: Settings) -> str:
    """Render the resource at ``uri``; raises UnknownResourceError."""
    return get_resource_doc(uri).render(settings)
