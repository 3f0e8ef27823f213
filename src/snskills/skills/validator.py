"""
Skill validator for snskills.

Checks a skill document against the authoring policy: required and
recommended frontmatter fields, enumerated values, tool declarations, and
body sections. Violations are returned as data, never raised.
"""

import logging
import re
from pathlib import Path
from typing import Any

from snskills.config import Config
from snskills.skills.discovery import (
    DEFAULT_SKILL_FILENAME,
    SkillEntry,
    iter_skill_entries,
    map_in_order,
)
from snskills.skills.models import COMPLEXITY_LEVELS, PLATFORMS, TOOL_TYPES, ValidationResult
from snskills.skills.parser import SkillParseError, extract_sections, parse_frontmatter

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "version", "description")
RECOMMENDED_FIELDS = ("author", "tags", "platforms", "tools", "complexity")

REQUIRED_SECTIONS = ("procedure",)
RECOMMENDED_SECTIONS = ("overview", "prerequisites", "best practices")

DEFAULT_MIN_PROCEDURE_LENGTH = 50

SEMVER_PREFIX = re.compile(r"^\d+\.\d+\.\d+")


class SkillValidator:
    """Validates skill documents against a fixed rule set."""

    def __init__(self, min_procedure_length: int = DEFAULT_MIN_PROCEDURE_LENGTH):
        """Initialize the validator.

        Args:
            min_procedure_length: Procedures shorter than this (after
                trimming) get a warning.
        """
        self.min_procedure_length = min_procedure_length

    @staticmethod
    def from_config(config: Config) -> "SkillValidator":
        """Create a SkillValidator from config."""
        return SkillValidator(config.validation.min_procedure_length)

    def validate(self, content: str, path: str = "unknown") -> ValidationResult:
        """Validate a single skill document.

        Args:
            content: Raw document text, frontmatter included.
            path: Skill path for the result.

        Returns:
            ValidationResult with ordered errors and warnings.
        """
        errors: list[str] = []
        warnings: list[str] = []

        try:
            metadata, body = parse_frontmatter(content)
        except SkillParseError as e:
            # Nothing else can be checked without metadata
            errors.append(str(e))
            return ValidationResult.from_findings(path, errors, warnings)

        self._check_frontmatter(metadata, errors, warnings)
        self._check_sections(body, errors, warnings)

        tools = metadata.get("tools")
        if tools:
            self._check_tools(tools, errors, warnings)

        return ValidationResult.from_findings(path, errors, warnings)

    def _check_frontmatter(
        self, metadata: dict[str, Any], errors: list[str], warnings: list[str]
    ) -> None:
        for field in REQUIRED_FIELDS:
            if not metadata.get(field):
                errors.append(f"Missing required field: {field}")

        for field in RECOMMENDED_FIELDS:
            if not metadata.get(field):
                warnings.append(f"Missing recommended field: {field}")

        version = metadata.get("version")
        if version and not SEMVER_PREFIX.match(str(version)):
            warnings.append(f"Version should follow semver format: {version}")

        complexity = metadata.get("complexity")
        if complexity and complexity not in COMPLEXITY_LEVELS:
            errors.append(
                f"Invalid complexity: {complexity}. Valid: {', '.join(COMPLEXITY_LEVELS)}"
            )

        platforms = metadata.get("platforms")
        if platforms:
            if not isinstance(platforms, list):
                errors.append("platforms must be a list")
            else:
                for platform in platforms:
                    if platform not in PLATFORMS:
                        warnings.append(f"Unknown platform: {platform}")

        tags = metadata.get("tags")
        if tags and not isinstance(tags, list):
            errors.append("tags must be a list")

    def _check_sections(self, body: str, errors: list[str], warnings: list[str]) -> None:
        sections = extract_sections(body)

        for section in REQUIRED_SECTIONS:
            if section not in sections:
                errors.append(f"Missing required section: ## {section}")

        for section in RECOMMENDED_SECTIONS:
            if section not in sections:
                warnings.append(f"Missing recommended section: ## {section}")

        procedure = sections.get("procedure")
        if procedure is not None and len(procedure.strip()) < self.min_procedure_length:
            warnings.append("Procedure section seems too short")

    def _check_tools(self, tools: Any, errors: list[str], warnings: list[str]) -> None:
        if not isinstance(tools, dict):
            errors.append("tools must be a mapping of tool type to list")
            return

        for tool_type, tool_list in tools.items():
            if tool_type not in TOOL_TYPES:
                warnings.append(f"Unknown tool type: {tool_type}")

            if not isinstance(tool_list, list):
                errors.append(f"tools.{tool_type} must be a list")

    def validate_entry(self, entry: SkillEntry) -> ValidationResult | None:
        """Read and validate one discovered skill.

        Returns:
            The result, a read-failure result, or None if the file vanished.
        """
        try:
            content = entry.file_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read skill {entry.skill_id}: {e}")
            return ValidationResult.read_failure(entry.skill_id, str(e))

        return self.validate(content, entry.skill_id)

    def validate_all(
        self,
        root: Path,
        skill_filename: str = DEFAULT_SKILL_FILENAME,
        max_workers: int = 1,
    ) -> list[ValidationResult]:
        """Validate every skill under a root directory.

        Walks the same layout as discovery. Wrapped directories without a
        skill file are skipped; unreadable files produce a failed result.

        Args:
            root: Skills root directory.
            skill_filename: Fixed filename inside wrapped skill directories.
            max_workers: Threads used to read files.

        Returns:
            Results in canonical (category, name) order.
        """
        entries = iter_skill_entries(Path(root), skill_filename)
        results = [
            result
            for result in map_in_order(self.validate_entry, entries, max_workers)
            if result is not None
        ]

        invalid = sum(1 for r in results if not r.valid)
        logger.info(f"Validated {len(results)} skill(s), {invalid} invalid")
        return results


def validate(content: str, path: str = "unknown") -> ValidationResult:
    """Validate a document with the default rules."""
    return SkillValidator().validate(content, path)


def validate_all(
    root: Path,
    skill_filename: str = DEFAULT_SKILL_FILENAME,
    validator: SkillValidator | None = None,
    max_workers: int = 1,
) -> list[ValidationResult]:
    """Validate every skill under root with the given (or default) validator."""
    validator = validator or SkillValidator()
    return validator.validate_all(root, skill_filename, max_workers)
