"""Tool catalog: weights, timeouts and minimum tiers per semantic tool.

All tools are open to the Free tier; daily limits (500/day) enforced by the
API provide the business gate. ``min_tier`` is metadata for documentation,
entitlement checks happen upstream.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType


class Tier(str, Enum):
    FREE = "free"
    WORKSPACE = "workspace"
    PREMIUM = "premium"


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    weight: int
    timeout_ms: int
    min_tier: Tier = Tier.FREE

    def __post_init__(self) -> None:
        if self.weight <= 0:
            raise ValueError(f"{self.name}: weight must be positive")
        if self.timeout_ms <= 0:
            raise ValueError(f"{self.name}: timeout must be positive")

    @property
    def timeout(self) -> float:
        """Timeout in seconds."""
        return self.timeout_ms / 1000


_DESCRIPTORS = [
    ToolDescriptor(
        name="dependency.explain",
        description="Get comprehensive explanation of a package including health, risk, and recommendations",
        weight=1,
        timeout_ms=15000,
    ),
    ToolDescriptor(
        name="dependency.health",
        description="Quick health check for a package (deprecated, vulnerable, unmaintained)",
        weight=1,
        timeout_ms=5000,
    ),
    ToolDescriptor(
        name="dependency.alternatives",
        description="Find alternative packages with adoption stats and migration effort",
        weight=1,
        timeout_ms=10000,
    ),
    ToolDescriptor(
        name="dependency.trends",
        description="Get trend data for a package (rising, stable, declining)",
        weight=1,
        timeout_ms=10000,
    ),
    ToolDescriptor(
        name="dependency.safe-upgrade",
        description="Evaluate if upgrading a package is safe with breaking change analysis",
        weight=2,
        timeout_ms=15000,
    ),
    ToolDescriptor(
        name="stack.recommend",
        description="Get stack recommendations based on use cases and requirements",
        weight=2,
        timeout_ms=20000,
    ),
    ToolDescriptor(
        name="stack.validate",
        description="Validate a stack for conflicts, redundancies, and issues",
        weight=1,
        timeout_ms=10000,
    ),
    ToolDescriptor(
        name="stack.defaults",
        description="Get canonical/default packages for a framework",
        weight=1,
        timeout_ms=5000,
    ),
    ToolDescriptor(
        name="migration.plan",
        description="Generate a detailed migration plan with action graph",
        weight=3,
        timeout_ms=30000,
    ),
    ToolDescriptor(
        name="architecture.evaluate",
        description="Comprehensive architecture evaluation with quality grades",
        weight=5,
        timeout_ms=45000,
    ),
    ToolDescriptor(
        name="signals.evaluate",
        description="Get reward signal for add/remove/upgrade/replace actions",
        weight=1,
        timeout_ms=10000,
    ),
]

TOOL_CONFIG: MappingProxyType[str, ToolDescriptor] = MappingProxyType(
    {d.name: d for d in _DESCRIPTORS}
)

# Hidden from tools/list but still callable by name.
HIDDEN_TOOLS: frozenset[str] = frozenset({"migration.plan"})


def get_tool(name: str) -> ToolDescriptor | None:
    return TOOL_CONFIG.get(name)


def is_known_tool(name: str) -> bool:
    return name in TOOL_CONFIG


def list_tools(include_hidden: bool = False) -> list[ToolDescriptor]:
    """Return descriptors in registry order, skipping hidden tools by default."""
    return [
        d for d in TOOL_CONFIG.values()
        if include_hidden or d.name not in HIDDEN_TOOLS
    ]
