"""
Skill models for snskills.

Defines the immutable records produced by discovery, loading, and
validation. Records carry data only; derived views live in the loader.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# Supported platforms
PLATFORMS: tuple[str, ...] = ("claude-code", "claude-desktop", "chatgpt", "cursor", "any")

# Difficulty tiers
COMPLEXITY_LEVELS: tuple[str, ...] = ("beginner", "intermediate", "advanced", "expert")

# Tool-type buckets under the `tools` mapping
TOOL_TYPES: tuple[str, ...] = ("mcp", "rest", "native", "cli")

DEFAULT_VERSION = "1.0.0"
DEFAULT_AUTHOR = "Unknown"
DEFAULT_COMPLEXITY = "intermediate"
DEFAULT_PLATFORMS = ["any"]
DEFAULT_ESTIMATED_TIME = "varies"
UNCATEGORIZED = "uncategorized"


class SkillInfo(BaseModel):
    """Lightweight skill record held by the registry.

    Built from the frontmatter only; the body is never parsed for these.
    """

    model_config = ConfigDict(frozen=True)

    path: str = Field(..., description="Skill identifier (category/name)")
    name: str = Field(..., description="Display name")
    version: str = Field(default=DEFAULT_VERSION, description="Free-form version, usually semver")
    description: str = Field(default="", description="Short description")
    author: str = Field(default=DEFAULT_AUTHOR, description="Skill author")
    tags: list[str] = Field(default_factory=list, description="Tags, order-preserving")
    platforms: list[str] = Field(
        default_factory=lambda: list(DEFAULT_PLATFORMS),
        description="Platforms the skill targets",
    )
    complexity: str = Field(default=DEFAULT_COMPLEXITY, description="Difficulty tier")
    category: str = Field(..., description="First segment of the path")
    tools: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Tool-type to tool identifiers",
    )

    @classmethod
    def from_metadata(cls, path: str, metadata: dict[str, Any]) -> "SkillInfo":
        """Create a record from raw frontmatter, applying defaults."""
        return cls(**normalize_metadata(path, metadata))


class SkillDocument(SkillInfo):
    """A fully loaded skill: metadata plus parsed sections."""

    estimated_time: str = Field(default=DEFAULT_ESTIMATED_TIME)

    # Lowercased heading -> trimmed content, including the synthetic "intro"
    sections: dict[str, str] = Field(default_factory=dict)

    raw_content: str = Field(default="", description="Body after the frontmatter, verbatim")
    metadata: dict[str, Any] = Field(default_factory=dict, description="Raw frontmatter")

    overview: str = ""
    prerequisites: str = ""
    procedure: str = ""
    tool_usage: str = ""
    best_practices: str = ""
    troubleshooting: str = ""
    examples: str = ""


class ValidationResult(BaseModel):
    """Outcome of validating one skill document."""

    model_config = ConfigDict(frozen=True)

    path: str
    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    summary: str = ""

    @classmethod
    def from_findings(
        cls, path: str, errors: list[str], warnings: list[str]
    ) -> "ValidationResult":
        """Build a result and its one-line summary from collected findings."""
        if errors:
            summary = f"Invalid: {len(errors)} error(s)"
        elif warnings:
            summary = f"Valid with {len(warnings)} warning(s)"
        else:
            summary = "Valid"

        return cls(
            path=path,
            valid=not errors,
            errors=list(errors),
            warnings=list(warnings),
            summary=summary,
        )

    @classmethod
    def read_failure(cls, path: str, message: str) -> "ValidationResult":
        """Result for an entry whose file exists but could not be read."""
        return cls(
            path=path,
            valid=False,
            errors=[f"Could not read file: {message}"],
            warnings=[],
            summary="Could not read file",
        )


class RegistryStats(BaseModel):
    """Counts computed from the registry indices."""

    total_skills: int = 0
    categories: int = 0
    tags: int = 0
    platforms: int = 0
    by_category: dict[str, int] = Field(default_factory=dict)
    by_complexity: dict[str, int] = Field(default_factory=dict)


def _as_str(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    return value if isinstance(value, str) else str(value)


def _as_str_list(value: Any, default: list[str]) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        return list(default)
    # De-duplicate while keeping first-seen order; blank items are dropped
    items = list(dict.fromkeys(str(item) for item in value if item is not None and item != ""))
    return items or list(default)


def _as_tools(value: Any) -> dict[str, list[str]]:
    if not isinstance(value, dict):
        return {}

    tools: dict[str, list[str]] = {}
    for tool_type, tool_list in value.items():
        if tool_list is None:
            tools[str(tool_type)] = []
        elif isinstance(tool_list, list):
            tools[str(tool_type)] = [str(tool) for tool in tool_list]
        else:
            tools[str(tool_type)] = [str(tool_list)]
    return tools


def normalize_metadata(path: str, metadata: dict[str, Any]) -> dict[str, Any]:
    """Map raw frontmatter onto SkillInfo fields with defaults applied.

    Unknown complexity values fall back to the default here; rejecting them
    is the validator's job.

    Args:
        path: Skill identifier (category/name).
        metadata: Raw frontmatter mapping.

    Returns:
        Keyword arguments for SkillInfo (or SkillDocument).
    """
    segments = path.split("/")
    skill_id = segments[-1]
    category = segments[0] or UNCATEGORIZED

    complexity = metadata.get("complexity")
    if complexity not in COMPLEXITY_LEVELS:
        complexity = DEFAULT_COMPLEXITY

    return {
        "path": path,
        "name": _as_str(metadata.get("name"), skill_id),
        "version": _as_str(metadata.get("version"), DEFAULT_VERSION),
        "description": _as_str(metadata.get("description"), ""),
        "author": _as_str(metadata.get("author"), DEFAULT_AUTHOR),
        "tags": _as_str_list(metadata.get("tags"), []),
        "platforms": _as_str_list(metadata.get("platforms"), DEFAULT_PLATFORMS),
        "complexity": complexity,
        "category": category,
        "tools": _as_tools(metadata.get("tools")),
    }
