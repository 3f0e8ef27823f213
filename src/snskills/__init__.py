"""
snskills - Platform-agnostic AI skills library

Indexes a directory tree of skill documents (markdown with YAML frontmatter)
and answers lookup, filter, search, and validation queries over them.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("snskills")
except PackageNotFoundError:
    __version__ = "1.0.0"

from snskills.skills import (
    COMPLEXITY_LEVELS,
    PLATFORMS,
    TOOL_TYPES,
    SkillDocument,
    SkillError,
    SkillInfo,
    SkillLoader,
    SkillNotFoundError,
    SkillParseError,
    SkillRegistry,
    SkillValidator,
    ValidationResult,
    create_registry,
    to_prompt,
    tools_for_platform,
    validate_all,
)

__all__ = [
    "__version__",
    "COMPLEXITY_LEVELS",
    "PLATFORMS",
    "TOOL_TYPES",
    "SkillDocument",
    "SkillError",
    "SkillInfo",
    "SkillLoader",
    "SkillNotFoundError",
    "SkillParseError",
    "SkillRegistry",
    "SkillValidator",
    "ValidationResult",
    "create_registry",
    "to_prompt",
    "tools_for_platform",
    "validate_all",
]
