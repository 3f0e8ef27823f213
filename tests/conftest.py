"""
Pytest configuration and fixtures for snskills tests.
"""

import logging
import os
import tempfile
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import pytest
import yaml
from typer.testing import CliRunner

from snskills.config import clear_config_cache

SkillWriter = Callable[..., Path]


def render_skill(metadata: dict[str, Any] | None, body: str) -> str:
    """Render a skill document from metadata and body."""
    if metadata is None:
        return body
    frontmatter = yaml.safe_dump(metadata, sort_keys=False)
    return f"---\n{frontmatter}---\n{body}"


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Keep tests away from the real ~/.snskills and any SNSKILLS_* settings."""
    for key in list(os.environ):
        if key.startswith("SNSKILLS_"):
            monkeypatch.delenv(key)

    monkeypatch.setenv("SNSKILLS_HOME", str(tmp_path / ".snskills-home"))
    monkeypatch.chdir(tmp_path)
    clear_config_cache()
    yield
    clear_config_cache()

    # The CLI detaches the package logger from root; undo that for caplog
    package_logger = logging.getLogger("snskills")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)
    package_logger.propagate = True


@pytest.fixture
def write_skill() -> SkillWriter:
    """Provide a helper that writes a skill document to disk."""

    def _write(path: Path, metadata: dict[str, Any] | None = None, body: str = "") -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(render_skill(metadata, body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def sample_skill_md() -> str:
    """Provide a complete, valid skill document."""
    return """---
name: Incident Triage
version: 1.2.0
description: Triage Priority Incidents
author: Happy Technologies
tags:
  - incident
  - triage
platforms:
  - any
complexity: beginner
estimated_time: 10 minutes
tools:
  mcp:
    - sn-query
    - sn-update
  native:
    - bash
  rest:
    - table-api
---

Quick orientation for the triage process.

## Overview

Classify and route new incidents.

## Prerequisites

- ITIL role

## Procedure

1. Query new incidents assigned to your group.
2. Set impact and urgency from the caller's description.
3. Route to the correct assignment group.

### Notes

Escalate P1 incidents immediately.

## Best Practices

Always add a work note.
"""


@pytest.fixture
def skills_root(temp_dir: Path, write_skill: SkillWriter, sample_skill_md: str) -> Path:
    """Provide a skills tree covering both layouts and a few bad entries.

    Layout:
        cmdb/broken.md             malformed frontmatter
        cmdb/ci-health.md          claude-code, tags cmdb/health
        cmdb/empty-skill/          wrapped directory with no SKILL.md
        cmdb/notes.txt             not a skill
        itsm/change-review/SKILL.md chatgpt, advanced
        itsm/incident-triage.md    any, beginner
    """
    root = temp_dir / "skills"

    (root / "itsm").mkdir(parents=True)
    (root / "itsm" / "incident-triage.md").write_text(sample_skill_md, encoding="utf-8")

    write_skill(
        root / "itsm" / "change-review" / "SKILL.md",
        {
            "name": "Change Review",
            "version": "2.0.0",
            "description": "Review normal changes before CAB",
            "author": "CAB Team",
            "tags": ["change", "ITIL"],
            "platforms": ["chatgpt"],
            "complexity": "advanced",
            "tools": {"rest": ["change-api"]},
        },
        "## Procedure\n\nOpen the change request and check the risk assessment.\n",
    )

    write_skill(
        root / "cmdb" / "ci-health.md",
        {
            "name": "CI Health Check",
            "version": "1.0.0",
            "description": "Check configuration item health",
            "tags": ["cmdb", "health"],
            "platforms": ["claude-code"],
        },
        "## Procedure\n\nRun the health dashboard.\n",
    )

    (root / "cmdb" / "broken.md").write_text(
        "---\nname: Broken\ntags: [unclosed\n---\n## Procedure\nNothing.\n",
        encoding="utf-8",
    )
    (root / "cmdb" / "empty-skill").mkdir()
    (root / "cmdb" / "notes.txt").write_text("not a skill", encoding="utf-8")

    return root
