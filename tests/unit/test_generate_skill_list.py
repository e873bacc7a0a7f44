#!/usr/bin/env python3
"""Tests for generate_skill_list.py - flat skill list for release notes."""

import subprocess
import sys
from collections.abc import Callable
from pathlib import Path

from generate_skill_list import first_sentence_with_period, skill_list_lines

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SCRIPT_PATH = PROJECT_ROOT / "scripts" / "generate_skill_list.py"


class TestSkillList:
    """Tests for list generation."""

    def test_lists_named_described_skills(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        write_skill("sentry-fix-issues", description="Find and fix issues. Uses MCP.")
        write_skill("sentry-code-review", description="Review code")
        assert skill_list_lines(repo / "skills") == [
            "- `sentry-code-review` - Review code",
            "- `sentry-fix-issues` - Find and fix issues.",
        ]

    def test_skips_incomplete_metadata(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        """Skills without a name or description are left out; no fallback naming."""
        write_skill(None, directory="nameless", description="Has a description.")
        write_skill("no-description")
        assert skill_list_lines(repo / "skills") == []

    def test_only_top_level_directories(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        write_skill("nested", directory="group/nested", description="Nested.")
        assert skill_list_lines(repo / "skills") == []

    def test_first_sentence_keeps_period(self) -> None:
        assert first_sentence_with_period("One. Two.") == "One."
        assert first_sentence_with_period("No break") == "No break"


class TestSkillListCLI:
    """Tests for the command line."""

    def test_prints_list(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        write_skill("sentry-fix-issues", description="Find and fix issues.")
        result = subprocess.run(
            [sys.executable, str(SCRIPT_PATH), str(repo / "skills")],
            capture_output=True,
            text=True,
            timeout=30,
        )
        assert result.returncode == 0
        assert result.stdout == "- `sentry-fix-issues` - Find and fix issues.\n"

    def test_missing_directory_prints_nothing(self, tmp_path: Path) -> None:
        result = subprocess.run(
            [sys.executable, str(SCRIPT_PATH), str(tmp_path / "missing")],
            capture_output=True,
            text=True,
            timeout=30,
        )
        assert result.returncode == 0
        assert result.stdout == ""
