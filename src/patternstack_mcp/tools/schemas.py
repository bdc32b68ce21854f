"""JSON Schema definitions for tool inputs."""

import copy

import jsonschema

from patternstack_mcp.errors import InputValidationError

ECOSYSTEMS = (
    "npm",
    "pypi",
    "go",
    "crates",
    "rubygems",
    "packagist",
    "hex",
    "maven",
    "nuget",
    "pub",
    "swift",
)

_ECOSYSTEM = {"type": "string", "enum": list(ECOSYSTEMS)}
_STRING_ARRAY = {"type": "array", "items": {"type": "string"}}


def _strings(description: str) -> dict:
    return {**_STRING_ARRAY, "description": description}


INPUT_SCHEMAS: dict[str, dict] = {
    "dependency.explain": {
        "type": "object",
        "properties": {
            "package": {"type": "string", "description": "Package name to explain"},
            "version": {"type": "string", "description": "Version to analyze (optional)"},
            "framework": {"type": "string", "description": "Framework context (e.g., next, django)"},
            "ecosystem": _ECOSYSTEM,
            "includeAlternatives": {"type": "boolean", "description": "Include alternative packages"},
            "includeMigrations": {"type": "boolean", "description": "Include migration information"},
        },
        "required": ["package"],
    },
    "dependency.health": {
        "type": "object",
        "properties": {
            "package": {"type": "string", "description": "Package name to check"},
            "ecosystem": _ECOSYSTEM,
        },
        "required": ["package"],
    },
    "dependency.alternatives": {
        "type": "object",
        "properties": {
            "package": {"type": "string", "description": "Package to find alternatives for"},
            "framework": {"type": "string", "description": "Framework context for ranking"},
            "ecosystem": _ECOSYSTEM,
            "limit": {"type": "number", "description": "Max alternatives to return"},
        },
        "required": ["package"],
    },
    "dependency.trends": {
        "type": "object",
        "properties": {
            "package": {"type": "string", "description": "Package to get trends for"},
            "framework": {"type": "string", "description": "Framework context"},
            "ecosystem": _ECOSYSTEM,
        },
        "required": ["package"],
    },
    "dependency.safe-upgrade": {
        "type": "object",
        "properties": {
            "package": {"type": "string", "description": "Package to upgrade"},
            "currentVersion": {"type": "string", "description": "Current version"},
            "targetVersion": {
                "type": "string",
                "description": "Target version (optional, defaults to latest)",
            },
            "ecosystem": _ECOSYSTEM,
        },
        "required": ["package", "currentVersion"],
    },
    "stack.recommend": {
        "type": "object",
        "properties": {
            "framework": {"type": "string", "description": "Target framework (e.g., next, django)"},
            "useCases": _strings(
                "Use cases: realtime, ai, ecommerce, cms, saas, api, mobile, desktop, cli, data, devtools"
            ),
            "persistence": {"type": "string", "enum": ["sql", "nosql", "graph", "kv", "none"]},
            "auth": {"type": "string", "enum": ["session", "jwt", "oauth", "magic-link", "none"]},
            "projectClass": {
                "type": "string",
                "enum": ["prototype", "startup", "growth", "enterprise"],
            },
            "priorities": _strings("Priorities: speed, stability, performance, cost"),
            "constraints": {
                "type": "object",
                "properties": {
                    "mustInclude": _STRING_ARRAY,
                    "mustExclude": _STRING_ARRAY,
                    "maxDependencies": {"type": "number"},
                },
            },
        },
        "required": ["useCases"],
    },
    "stack.validate": {
        "type": "object",
        "properties": {
            "packages": _strings("Packages to validate"),
            "framework": {"type": "string", "description": "Framework context"},
            "ecosystem": _ECOSYSTEM,
        },
        "required": ["packages"],
    },
    "stack.defaults": {
        "type": "object",
        "properties": {
            "framework": {"type": "string", "description": "Framework to get defaults for"},
            "strictMode": {"type": "boolean", "description": "Only return required packages"},
            "categories": _strings("Filter by categories"),
        },
        "required": ["framework"],
    },
    "migration.plan": {
        "type": "object",
        "properties": {
            "from": {"type": "string", "description": "Source package (e.g., moment@2.29.0)"},
            "to": {"type": "string", "description": "Target package (e.g., date-fns@3.0.0)"},
            "ecosystem": _ECOSYSTEM,
            "projectContext": {
                "type": "object",
                "properties": {
                    "framework": {"type": "string"},
                    "packages": _STRING_ARRAY,
                    "files": _STRING_ARRAY,
                },
            },
        },
        "required": ["from", "to"],
    },
    "architecture.evaluate": {
        "type": "object",
        "properties": {
            "packages": _strings("Production dependencies"),
            "devDependencies": _strings("Dev dependencies"),
            "framework": {"type": "string", "description": "Expected framework"},
            "ecosystem": _ECOSYSTEM,
        },
        "required": ["packages"],
    },
    "signals.evaluate": {
        "type": "object",
        "properties": {
            "action": {
                "type": "string",
                "enum": ["add", "remove", "upgrade", "replace"],
                "description": "Action type",
            },
            "package": {"type": "string", "description": "Package to evaluate"},
            "targetPackage": {"type": "string", "description": "Target package (for replace action)"},
            "targetVersion": {"type": "string", "description": "Target version (for upgrade action)"},
            "currentStack": _strings("Current packages"),
            "framework": {"type": "string", "description": "Framework context"},
            "ecosystem": _ECOSYSTEM,
        },
        "required": ["action", "package", "currentStack"],
    },
}


def get_input_schema(name: str) -> dict | None:
    """Return a private copy of the tool's input schema, or None if unknown."""
    schema = INPUT_SCHEMAS.get(name)
    return copy.deepcopy(schema) if schema is not None else None


def validate_input(name: str, arguments: dict) -> None:
    """Check ``arguments`` against the tool's schema; raises InputValidationError."""
    schema = INPUT_SCHEMAS.get(name)
    if schema is None:
        return
    try:
        jsonschema.validate(instance=arguments, schema=schema)
    except jsonschema.ValidationError as e:
        raise InputValidationError(name, e.message) from e
