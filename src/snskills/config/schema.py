"""
Pydantic configuration schema for snskills.

This module defines all configuration models with validation.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from snskills.storage.paths import expand_path

# =============================================================================
# Skills Configuration
# =============================================================================


class SkillsConfig(BaseModel):
    """Skills tree location and discovery settings."""

    model_config = ConfigDict(extra="allow")

    root: str = Field(default="./skills", description="Skills root directory")
    skill_filename: str = Field(
        default="SKILL.md",
        description="Filename inside a wrapped skill directory",
    )
    max_workers: int = Field(
        default=1,
        ge=1,
        le=32,
        description="Threads used to read skill files (1 = sequential)",
    )

    def resolve_root(self, override: str | Path | None = None) -> Path:
        """Get the expanded skills root, preferring an explicit override."""
        return expand_path(override if override is not None else self.root)


# =============================================================================
# Validation Configuration
# =============================================================================


class ValidationConfig(BaseModel):
    """Skill validation settings."""

    model_config = ConfigDict(extra="allow")

    min_procedure_length: int = Field(
        default=50,
        ge=0,
        description="Procedures shorter than this get a warning",
    )


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"


# =============================================================================
# Root Configuration Model
# =============================================================================


class Config(BaseModel):
    """
    Root configuration model for snskills.

    Configuration can be loaded from YAML files and environment variables,
    merged in order of priority.
    """

    model_config = ConfigDict(extra="allow")

    skills: SkillsConfig = Field(default_factory=SkillsConfig)
    validation: ValidationConfig = Field(default_factory=ValidationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
