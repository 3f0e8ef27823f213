"""
Unit tests for skill validation.
"""

from typing import Any

import pytest
import yaml

from snskills.config import Config
from snskills.skills import (
    SkillEntry,
    SkillLoader,
    SkillValidator,
    ValidationResult,
    validate,
    validate_all,
)

FULL_BODY = """
## Overview

Route incidents to the right team.

## Prerequisites

ITIL role.

## Procedure

1. Open the incident queue and sort by priority.
2. Assign each incident to the owning group.

## Best Practices

Add a work note for every change.
"""


def make_doc(metadata: dict[str, Any] | None = None, body: str = FULL_BODY, **overrides) -> str:
    """Build a document from a valid baseline with overrides (None deletes)."""
    if metadata is None:
        metadata = {
            "name": "Incident Routing",
            "version": "1.0.0",
            "description": "Route incidents",
            "author": "Ops",
            "tags": ["incident"],
            "platforms": ["any"],
            "tools": {"mcp": ["sn-query"]},
            "complexity": "beginner",
        }
    metadata = dict(metadata)
    for key, value in overrides.items():
        if value is None:
            metadata.pop(key, None)
        else:
            metadata[key] = value
    return f"---\n{yaml.safe_dump(metadata, sort_keys=False)}---\n{body}"


# =============================================================================
# ValidationResult Tests
# =============================================================================


class TestValidationResult:
    """Tests for result construction and summaries."""

    def test_valid_summary(self):
        """Test a clean result."""
        result = ValidationResult.from_findings("a/b", [], [])
        assert result.valid is True
        assert result.summary == "Valid"

    def test_warning_summary(self):
        """Test warnings do not affect validity."""
        result = ValidationResult.from_findings("a/b", [], ["w1", "w2"])
        assert result.valid is True
        assert result.summary == "Valid with 2 warning(s)"

    def test_error_summary(self):
        """Test errors make the result invalid and dominate the summary."""
        result = ValidationResult.from_findings("a/b", ["e1"], ["w1"])
        assert result.valid is False
        assert result.summary == "Invalid: 1 error(s)"

    def test_read_failure(self):
        """Test the dedicated read-failure result."""
        result = ValidationResult.read_failure("a/b", "permission denied")
        assert result.valid is False
        assert result.errors == ["Could not read file: permission denied"]
        assert result.summary == "Could not read file"


# =============================================================================
# Rule Tests
# =============================================================================


class TestSkillValidator:
    """Tests for individual validation rules."""

    @pytest.fixture
    def validator(self) -> SkillValidator:
        return SkillValidator()

    def test_complete_document_is_clean(self, validator, sample_skill_md):
        """Test a document satisfying every rule."""
        result = validator.validate(sample_skill_md, "itsm/incident-triage")
        assert result.path == "itsm/incident-triage"
        assert result.valid is True
        assert result.errors == []
        assert result.warnings == []
        assert result.summary == "Valid"

    def test_default_path(self, validator):
        """Test the path defaults to "unknown"."""
        assert validator.validate(make_doc()).path == "unknown"

    @pytest.mark.parametrize("field", ["name", "version", "description"])
    def test_missing_required_field(self, validator, field):
        """Test each required field is an error when absent."""
        result = validator.validate(make_doc(**{field: None}))
        assert result.valid is False
        assert f"Missing required field: {field}" in result.errors

    def test_empty_required_field(self, validator):
        """Test an empty value counts as missing."""
        result = validator.validate(make_doc(name=""))
        assert result.errors == ["Missing required field: name"]

    @pytest.mark.parametrize("field", ["author", "tags", "platforms", "tools", "complexity"])
    def test_missing_recommended_field(self, validator, field):
        """Test each recommended field is a warning when absent."""
        result = validator.validate(make_doc(**{field: None}))
        assert result.valid is True
        assert result.warnings == [f"Missing recommended field: {field}"]

    @pytest.mark.parametrize("version", ["v1.0.0", "1.0", "latest"])
    def test_version_not_semver(self, validator, version):
        """Test non-semver versions warn."""
        result = validator.validate(make_doc(version=version))
        assert result.valid is True
        assert f"Version should follow semver format: {version}" in result.warnings

    @pytest.mark.parametrize("version", ["1.0.0", "10.20.30", "2.0.0-beta.1"])
    def test_version_semver_prefix(self, validator, version):
        """Test versions starting with digits.digits.digits pass."""
        assert validator.validate(make_doc(version=version)).warnings == []

    def test_invalid_complexity(self, validator):
        """Test an out-of-enum complexity is an error."""
        result = validator.validate(make_doc(complexity="super-hard"))
        assert result.valid is False
        assert result.errors == [
            "Invalid complexity: super-hard. Valid: beginner, intermediate, advanced, expert"
        ]

    def test_platforms_not_list(self, validator):
        """Test a scalar platforms value is an error."""
        result = validator.validate(make_doc(platforms="chatgpt"))
        assert result.errors == ["platforms must be a list"]

    def test_unknown_platform(self, validator):
        """Test unknown platform tokens warn."""
        result = validator.validate(make_doc(platforms=["chatgpt", "windows"]))
        assert result.valid is True
        assert result.warnings == ["Unknown platform: windows"]

    def test_tags_not_list(self, validator):
        """Test a scalar tags value is an error."""
        result = validator.validate(make_doc(tags="incident"))
        assert result.errors == ["tags must be a list"]

    def test_tool_rules(self, validator):
        """Test unknown tool types warn and non-list values are errors."""
        result = validator.validate(
            make_doc(tools={"mcp": ["sn-query"], "magic": ["wand"], "rest": "table-api"})
        )
        assert result.valid is False
        assert result.errors == ["tools.rest must be a list"]
        assert result.warnings == ["Unknown tool type: magic"]

    def test_tools_not_mapping(self, validator):
        """Test a scalar tools value is an error."""
        result = validator.validate(make_doc(tools="bash"))
        assert result.errors == ["tools must be a mapping of tool type to list"]

    def test_missing_procedure(self, validator):
        """Test a document without ## Procedure is invalid."""
        body = FULL_BODY.replace("## Procedure", "## Steps")
        result = validator.validate(make_doc(body=body))
        assert result.valid is False
        assert result.errors == ["Missing required section: ## procedure"]

    def test_missing_overview(self, validator):
        """Test a missing recommended section is only a warning."""
        body = FULL_BODY.replace("## Overview", "## Summary")
        result = validator.validate(make_doc(body=body))
        assert result.valid is True
        assert result.warnings == ["Missing recommended section: ## overview"]

    def test_section_headings_case_insensitive(self, validator):
        """Test section checks use the lowercased heading."""
        body = FULL_BODY.replace("## Procedure", "## PROCEDURE")
        assert validator.validate(make_doc(body=body)).valid is True

    def test_short_procedure(self, validator):
        """Test a short procedure warns."""
        result = validator.validate(make_doc(body=FULL_BODY + "\n## Procedure\nToo short.\n"))
        assert result.warnings == ["Procedure section seems too short"]

    def test_procedure_threshold_configurable(self):
        """Test the minimum procedure length comes from the validator."""
        doc = make_doc(body=FULL_BODY + "\n## Procedure\nToo short.\n")
        assert SkillValidator(min_procedure_length=5).validate(doc).warnings == []

    def test_empty_procedure_is_present_but_short(self, validator):
        """Test an empty ## Procedure counts as present."""
        result = validator.validate(make_doc(body=FULL_BODY + "\n## Procedure\n"))
        assert result.valid is True
        assert result.warnings == ["Procedure section seems too short"]

    def test_malformed_frontmatter_short_circuits(self, validator):
        """Test a YAML failure records one error and nothing else."""
        result = validator.validate("---\nname: [unclosed\n---\nNo sections.", "x/bad")
        assert result.valid is False
        assert len(result.errors) == 1
        assert result.errors[0].startswith("Invalid YAML frontmatter")
        assert result.warnings == []
        assert result.summary == "Invalid: 1 error(s)"

    def test_byte_order_mark(self, validator):
        """Test a BOM-prefixed document is validated by its frontmatter."""
        result = validator.validate("\ufeff" + make_doc())
        assert result.valid is True
        assert result.errors == []

    def test_no_frontmatter(self, validator):
        """Test a bare body fails every required field."""
        result = validator.validate(FULL_BODY)
        assert result.errors == [
            "Missing required field: name",
            "Missing required field: version",
            "Missing required field: description",
        ]
        assert len(result.warnings) == 5

    def test_findings_are_ordered(self, validator):
        """Test errors come out in rule order."""
        result = validator.validate(
            make_doc(name=None, complexity="super-hard", tags="x", body="## Overview\nx")
        )
        assert result.errors == [
            "Missing required field: name",
            "Invalid complexity: super-hard. Valid: beginner, intermediate, advanced, expert",
            "tags must be a list",
            "Missing required section: ## procedure",
        ]

    def test_from_config(self):
        """Test the procedure threshold is read from config."""
        config = Config.model_validate({"validation": {"min_procedure_length": 7}})
        assert SkillValidator.from_config(config).min_procedure_length == 7

    def test_module_validate(self):
        """Test the module-level helper uses default rules."""
        assert validate(make_doc(), "a/b").summary == "Valid"


class TestIncidentTriageExample:
    """End-to-end check of a minimal but valid skill."""

    DOC = make_doc(
        {
            "name": "Incident Triage",
            "version": "1.0.0",
            "description": "Triages incoming incidents",
            "complexity": "beginner",
            "platforms": ["any"],
        },
        body="## Procedure\nDo X then Y.",
    )

    def test_validates_with_warnings(self):
        """Test the document is valid and warns about missing fields."""
        result = validate(self.DOC, "itsm/incident-triage")
        assert result.valid is True
        assert result.errors == []
        for field in ("author", "tags", "tools"):
            assert f"Missing recommended field: {field}" in result.warnings

    def test_loads_procedure(self):
        """Test the loaded procedure is the exact section text."""
        skill = SkillLoader.parse(self.DOC, "itsm/incident-triage")
        assert skill.procedure == "Do X then Y."
        assert skill.name == "Incident Triage"


# =============================================================================
# Batch Validation Tests
# =============================================================================


class TestValidateAll:
    """Tests for validating a whole tree."""

    def test_validate_all(self, skills_root):
        """Test every resolvable skill gets one result in canonical order."""
        results = validate_all(skills_root)
        assert [r.path for r in results] == [
            "cmdb/broken",
            "cmdb/ci-health",
            "itsm/change-review",
            "itsm/incident-triage",
        ]
        by_path = {r.path: r for r in results}
        assert by_path["cmdb/broken"].valid is False
        assert by_path["cmdb/broken"].summary == "Invalid: 1 error(s)"
        assert by_path["cmdb/ci-health"].summary == "Valid with 7 warning(s)"
        assert by_path["itsm/change-review"].summary == "Valid with 3 warning(s)"
        assert by_path["itsm/incident-triage"].summary == "Valid"

    def test_threaded_matches_sequential(self, skills_root):
        """Test parallel validation keeps canonical order."""
        sequential = SkillValidator().validate_all(skills_root)
        threaded = SkillValidator().validate_all(skills_root, max_workers=4)
        assert threaded == sequential

    def test_unreadable_file_recorded(self, temp_dir):
        """Test undecodable files become a dedicated failure result."""
        (temp_dir / "ops").mkdir()
        (temp_dir / "ops" / "binary.md").write_bytes(b"\xff\xfe\x00\x81 not utf-8")

        results = validate_all(temp_dir)
        assert len(results) == 1
        assert results[0].path == "ops/binary"
        assert results[0].valid is False
        assert results[0].summary == "Could not read file"
        assert results[0].errors[0].startswith("Could not read file:")

    def test_vanished_file_skipped(self, temp_dir):
        """Test a missing file is skipped rather than recorded."""
        entry = SkillEntry("ops/gone", "ops", temp_dir / "ops" / "gone.md")
        assert SkillValidator().validate_entry(entry) is None

    def test_missing_root(self, temp_dir):
        """Test a missing root validates nothing."""
        assert validate_all(temp_dir / "missing") == []

    def test_custom_validator(self, skills_root):
        """Test a configured validator is used for the batch."""
        results = validate_all(skills_root, validator=SkillValidator(min_procedure_length=0))
        by_path = {r.path: r for r in results}
        assert "Procedure section seems too short" not in by_path["cmdb/ci-health"].warnings
