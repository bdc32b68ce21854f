"""Tests for patternstack_mcp.tools.schemas module."""

import jsonschema
import pytest

from patternstack_mcp.tools.registry import TOOL_CONFIG
from patternstack_mcp.errors import InputValidationError
from patternstack_mcp.tools.schemas import ECOSYSTEMS, INPUT_SCHEMAS, get_input_schema, validate_input


def test_every_tool_has_a_schema():
    assert set(INPUT_SCHEMAS) == set(TOOL_CONFIG)


def test_schemas_are_objects_with_required_fields():
    for name, schema in INPUT_SCHEMAS.items():
        assert schema["type"] == "object", name
        assert schema["required"], name
        for field in schema["required"]:
            assert field in schema["properties"], f"{name}.{field}"


def test_ecosystem_enum():
    assert ECOSYSTEMS == (
        "npm", "pypi", "go", "crates", "rubygems", "packagist",
        "hex", "maven", "nuget", "pub", "swift",
    )
    assert INPUT_SCHEMAS["dependency.health"]["properties"]["ecosystem"]["enum"] == list(ECOSYSTEMS)


def test_required_fields():
    assert INPUT_SCHEMAS["dependency.safe-upgrade"]["required"] == ["package", "currentVersion"]
    assert INPUT_SCHEMAS["stack.recommend"]["required"] == ["useCases"]
    assert INPUT_SCHEMAS["migration.plan"]["required"] == ["from", "to"]
    assert INPUT_SCHEMAS["signals.evaluate"]["required"] == ["action", "package", "currentStack"]


def test_unknown_ecosystem_fails_validation():
    schema = INPUT_SCHEMAS["dependency.explain"]
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate({"package": "lodash", "ecosystem": "cobol"}, schema)


def test_valid_input_passes_validation():
    jsonschema.validate(
        {"action": "replace", "package": "moment", "targetPackage": "date-fns", "currentStack": ["react"]},
        INPUT_SCHEMAS["signals.evaluate"],
    )


def test_missing_required_field_fails_validation():
    with pytest.raises(jsonschema.ValidationError, match="'currentVersion' is a required property"):
        jsonschema.validate({"package": "react"}, INPUT_SCHEMAS["dependency.safe-upgrade"])


def test_closed_enum_on_signal_action():
    with pytest.raises(jsonschema.ValidationError):
        jsonschema.validate(
            {"action": "delete", "package": "x", "currentStack": []},
            INPUT_SCHEMAS["signals.evaluate"],
        )


def test_get_input_schema_returns_copy():
    schema = get_input_schema("dependency.health")
    schema["properties"]["ecosystem"]["enum"].append("cobol")
    assert "cobol" not in INPUT_SCHEMAS["dependency.health"]["properties"]["ecosystem"]["enum"]


def test_get_input_schema_unknown():
    assert get_input_schema("nope") is None


def test_validate_input_accepts_valid_arguments():
    validate_input("migration.plan", {"from": "moment", "to": "dayjs", "ecosystem": "npm"})


def test_validate_input_rejects_unknown_ecosystem():
    with pytest.raises(InputValidationError, match="'cobol' is not one of") as exc_info:
        validate_input("migration.plan", {"from": "moment", "to": "dayjs", "ecosystem": "cobol"})
    assert exc_info.value.tool == "migration.plan"


def test_validate_input_rejects_missing_required():
    with pytest.raises(InputValidationError, match="'from' is a required property"):
        validate_input("migration.plan", {"to": "dayjs"})


def test_validate_input_ignores_unregistered_tool():
    validate_input("made.up", {"anything": 1})
