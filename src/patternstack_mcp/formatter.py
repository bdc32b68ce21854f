"""Render upstream tool results as markdown.

Each tool with a bespoke template has a pydantic model describing the fields
the template reads. Payloads that do not match their model, and tools with no
template, fall back to a pretty-printed JSON block, so rendering never fails
on an unexpected shape.
"""

import json
import logging
import math
from collections.abc import Callable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel

logger = logging.getLogger(__name__)

Number = int | float


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, extra="ignore")


# ---------------------------------------------------------------------------
# Payload models
# ---------------------------------------------------------------------------


class PackageInfo(_Payload):
    name: str
    version: str | None = None
    ecosystem: str | None = None


class PackageHealth(_Payload):
    status: str
    security_issues: Number = 0
    maintenance_score: Number


class Risk(_Payload):
    level: str
    factors: list[str] = []
    mitigations: list[str] = []


class DependencyExplainResult(_Payload):
    package: PackageInfo
    health: PackageHealth
    risk: Risk


class SecurityIssue(_Payload):
    severity: str
    cve: str
    title: str


class DependencyHealthResult(_Payload):
    status: str
    deprecated: bool = False
    deprecation_reason: str | None = None
    security_issues: list[SecurityIssue] = []


class Alternative(_Payload):
    name: str
    adoption: Number | str | None = None
    migration_effort: str | None = None
    reason: str | None = None


class DependencyAlternativesResult(_Payload):
    package: str | PackageInfo | None = None
    alternatives: list[Alternative]


class StackInfo(_Payload):
    framework: str
    ecosystem: str | None = None
    description: str = ""


class RecommendedPackage(_Payload):
    name: str
    category: str
    reason: str
    confidence: Number


class StackRecommendResult(_Payload):
    stack: StackInfo
    packages: list[RecommendedPackage] = []


class ValidationIssue(_Payload):
    type: str
    severity: str
    packages: list[str] = []
    message: str


class StackValidateResult(_Payload):
    valid: bool
    score: Number
    issues: list[ValidationIssue] = []


class MigrationEndpoint(_Payload):
    package: str


class Migration(_Payload):
    from_: MigrationEndpoint = Field(alias="from")
    to: MigrationEndpoint
    summary: str = ""
    difficulty: str


class MigrationImpact(_Payload):
    estimated_files: Number
    breaking_changes: Number


class MigrationStep(_Payload):
    order: int
    type: str
    description: str
    automated: bool = False


class MigrationPlanResult(_Payload):
    migration: Migration
    impact: MigrationImpact
    steps: list[MigrationStep] = []


class Quality(_Payload):
    overall: Number
    grade: str
    summary: str = ""
    dimensions: dict[str, Number] = {}


class ArchitectureIssue(_Payload):
    name: str
    severity: str
    description: str


class ArchitectureEvaluateResult(_Payload):
    quality: Quality
    issues: list[ArchitectureIssue] = []


class SignalsEvaluateResult(_Payload):
    reward: float
    recommendation: str
    reasoning: list[str] = []


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def display(value: Any) -> str:
    """String form of a JSON value as it reads in markdown output."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
    return str(value)


def _fixed(value: Number, digits: int) -> str:
    """Fixed-point text rounding exact ties away from zero, like JS toFixed."""
    if not math.isfinite(value):
        return display(value)
    quantum = Decimal(1).scaleb(-digits)
    return f"{Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP):f}"


def _yes_no(flag: Any) -> str:
    return "Yes" if flag else "No"


def format_guidance(agi: dict) -> str:
    """Render the ``_agi`` guidance block appended after every result."""
    text = "\n---\n## AGI Guidance\n"
    for key, value in agi.items():
        if isinstance(value, list):
            text += f"- **{key}**: {', '.join(display(v) for v in value)}\n"
        else:
            text += f"- **{key}**: {display(value)}\n"
    return text


def render_generic(tool: str, result: Any) -> str:
    body = json.dumps(result, indent=2, ensure_ascii=False, default=str)
    return f"# {tool} Result\n\n```json\n{body}\n```"


# ---------------------------------------------------------------------------
# Templates
# ---------------------------------------------------------------------------


def _render_explain(data: DependencyExplainResult, agi: dict) -> str:
    pkg, health, risk = data.package, data.health, data.risk
    title = f"{pkg.name}@{pkg.version}" if pkg.version else pkg.name
    text = f"# {title}\n\n"
    if pkg.ecosystem:
        text += f"**Ecosystem**: {pkg.ecosystem}\n"
    text += f"**Status**: {health.status}\n"
    text += f"**Security Issues**: {display(health.security_issues)}\n"
    text += f"**Maintenance Score**: {display(health.maintenance_score)}/100\n\n"

    if risk.level != "low":
        text += f"## Risk: {risk.level.upper()}\n"
        if risk.factors:
            text += f"**Factors**: {', '.join(risk.factors)}\n"
        if risk.mitigations:
            text += f"**Mitigations**: {', '.join(risk.mitigations)}\n"
        text += "\n"
    return text


def _render_health(data: DependencyHealthResult, agi: dict) -> str:
    text = "# Health Check\n\n"
    text += f"**Status**: {data.status}\n"
    text += f"**Safe**: {_yes_no(agi.get('safe'))}\n"
    text += f"**Action**: {display(agi.get('action', 'unknown'))}\n"

    if data.deprecated:
        text += f"\n**Deprecated**: {data.deprecation_reason or 'Yes'}\n"

    if data.security_issues:
        text += "\n## Security Issues\n"
        for issue in data.security_issues:
            text += f"- **{issue.cve}** ({issue.severity}): {issue.title}\n"
    return text


def _render_alternatives(data: DependencyAlternativesResult, agi: dict) -> str:
    package = data.package.name if isinstance(data.package, PackageInfo) else data.package
    text = f"# Alternatives to {package}\n\n" if package else "# Alternatives\n\n"
    if not data.alternatives:
        return text + "No alternatives found.\n"

    for rank, alt in enumerate(data.alternatives, start=1):
        text += f"{rank}. **{alt.name}**\n"
        if alt.adoption is not None:
            text += f"   - **Adoption**: {display(alt.adoption)}\n"
        if alt.migration_effort:
            text += f"   - **Migration Effort**: {alt.migration_effort}\n"
        if alt.reason:
            text += f"   - **Reason**: {alt.reason}\n"
    return text


def _render_recommend(data: StackRecommendResult, agi: dict) -> str:
    text = f"# Recommended Stack: {data.stack.framework}\n\n"
    text += f"{data.stack.description}\n\n"
    text += "## Packages\n\n"

    for pkg in data.packages:
        text += f"### {pkg.name}\n"
        text += f"- **Category**: {pkg.category}\n"
        text += f"- **Confidence**: {_fixed(pkg.confidence * 100, 0)}%\n"
        text += f"- **Reason**: {pkg.reason}\n\n"

    install = agi.get("installCommand")
    if install:
        text += f"## Install\n```bash\n{install}\n```\n"
    return text


def _render_validate(data: StackValidateResult, agi: dict) -> str:
    text = "# Stack Validation\n\n"
    text += f"**Valid**: {_yes_no(data.valid)}\n"
    text += f"**Score**: {display(data.score)}/100\n\n"

    if data.issues:
        text += "## Issues\n\n"
        for issue in data.issues:
            icon = "❌" if issue.severity == "error" else "⚠️"
            text += f"{icon} **{issue.type}** ({issue.severity}): {issue.message}\n"
            text += f"  Packages: {', '.join(issue.packages)}\n\n"
    return text


def _render_migration(data: MigrationPlanResult, agi: dict) -> str:
    migration, impact = data.migration, data.impact
    text = "# Migration Plan\n\n"
    text += f"**From**: {migration.from_.package}\n"
    text += f"**To**: {migration.to.package}\n"
    text += f"**Difficulty**: {migration.difficulty}\n\n"
    text += f"{migration.summary}\n\n"

    text += "## Impact\n"
    text += f"- **Estimated Files**: {display(impact.estimated_files)}\n"
    text += f"- **Breaking Changes**: {display(impact.breaking_changes)}\n\n"

    text += "## Steps\n\n"
    for step in data.steps:
        mode = "(automated)" if step.automated else "(manual)"
        text += f"{step.order}. **{step.type}** {mode}: {step.description}\n"
    return text


def _render_architecture(data: ArchitectureEvaluateResult, agi: dict) -> str:
    quality = data.quality
    text = "# Architecture Evaluation\n\n"
    text += f"**Grade**: {quality.grade}\n"
    text += f"**Score**: {display(quality.overall)}/100\n\n"
    text += f"{quality.summary}\n\n"

    text += "## Dimensions\n"
    for dim, score in quality.dimensions.items():
        text += f"- **{dim}**: {display(score)}/100\n"

    if data.issues:
        text += "\n## Issues\n"
        for issue in data.issues:
            text += f"- **{issue.name}** ({issue.severity}): {issue.description}\n"
    return text


def _render_signals(data: SignalsEvaluateResult, agi: dict) -> str:
    if data.reward > 0.3:
        icon = "✅"
    elif data.reward < -0.3:
        icon = "❌"
    else:
        icon = "⚠️"
    text = f"# Signal Evaluation {icon}\n\n"
    text += f"**Reward**: {_fixed(data.reward, 2)}\n"
    text += f"**Recommendation**: {data.recommendation}\n\n"

    if data.reasoning:
        text += "## Reasoning\n"
        for reason in data.reasoning:
            text += f"- {reason}\n"
    return text


RENDERERS: dict[str, tuple[type[_Payload], Callable[[Any, dict], str]]] = {
    "dependency.explain": (DependencyExplainResult, _render_explain),
    "dependency.health": (DependencyHealthResult, _render_health),
    "dependency.alternatives": (DependencyAlternativesResult, _render_alternatives),
    "stack.recommend": (StackRecommendResult, _render_recommend),
    "stack.validate": (StackValidateResult, _render_validate),
    "migration.plan": (MigrationPlanResult, _render_migration),
    "architecture.evaluate": (ArchitectureEvaluateResult, _render_architecture),
    "signals.evaluate": (SignalsEvaluateResult, _render_signals),
}


def format_result(tool: str, result: Any) -> str:
    """Format a tool result for display."""
    agi = result.get("_agi") if isinstance(result, dict) else None
    if not isinstance(agi, dict):
        agi = None

    text = None
    entry = RENDERERS.get(tool)
    if entry is not None and isinstance(result, dict):
        model, render = entry
        try:
            payload = model.model_validate(result)
        except ValidationError:
            logger.debug("Unexpected %s result shape, using generic rendering", tool)
        else:
            text = render(payload, agi or {})
    if text is None:
        text = render_generic(tool, result)

    if agi is not None:
        text += format_guidance(agi)
    return text
