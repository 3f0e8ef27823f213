"""
snskills Skills System.

A skill is a markdown document with YAML frontmatter, stored as either
<root>/<category>/<name>.md or <root>/<category>/<name>/SKILL.md and
identified as "category/name".

Usage:
    from snskills.skills import SkillLoader, create_registry, to_prompt, validate_all

    # Discover and query
    registry = create_registry("./skills")
    results = registry.search("incident")
    chatgpt_skills = registry.find_by_platform("chatgpt")

    # Load one skill in full
    skill = SkillLoader("./skills").load("itsm/incident-triage")
    print(to_prompt(skill))

    # Validate everything
    results = validate_all("./skills")
"""

# Models
from snskills.skills.models import (
    COMPLEXITY_LEVELS,
    PLATFORMS,
    TOOL_TYPES,
    RegistryStats,
    SkillDocument,
    SkillInfo,
    ValidationResult,
    normalize_metadata,
)

# Parser
from snskills.skills.parser import (
    SkillError,
    SkillParseError,
    extract_section_names,
    extract_sections,
    parse_document,
    parse_frontmatter,
)

# Discovery
from snskills.skills.discovery import (
    DEFAULT_SKILL_FILENAME,
    SkillEntry,
    iter_skill_entries,
    resolve_skill_file,
)

# Loader
from snskills.skills.loader import (
    SkillLoader,
    SkillNotFoundError,
    get_instructions,
    to_prompt,
    tools_for_platform,
)

# Registry
from snskills.skills.registry import (
    SkillRegistry,
    create_registry,
)

# Validator
from snskills.skills.validator import (
    SkillValidator,
    validate,
    validate_all,
)

__all__ = [
    # Models
    "COMPLEXITY_LEVELS",
    "PLATFORMS",
    "TOOL_TYPES",
    "RegistryStats",
    "SkillDocument",
    "SkillInfo",
    "ValidationResult",
    "normalize_metadata",
    # Parser
    "SkillError",
    "SkillParseError",
    "extract_section_names",
    "extract_sections",
    "parse_document",
    "parse_frontmatter",
    # Discovery
    "DEFAULT_SKILL_FILENAME",
    "SkillEntry",
    "iter_skill_entries",
    "resolve_skill_file",
    # Loader
    "SkillLoader",
    "SkillNotFoundError",
    "get_instructions",
    "to_prompt",
    "tools_for_platform",
    # Registry
    "SkillRegistry",
    "create_registry",
    # Validator
    "SkillValidator",
    "validate",
    "validate_all",
]
