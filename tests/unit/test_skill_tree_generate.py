#!/usr/bin/env python3
"""Tests for skill_tree_generate.py - SKILL_TREE.md rendering."""

from collections.abc import Callable
from pathlib import Path

import pytest
from skill_categorize import categorize
from skill_registry import build_registry
from skill_tree_config import NavigationEntry, SectionConfig, SkillTreeConfig
from skill_tree_generate import column_value, first_sentence, generate_skill_tree, render_section

SDK_PREFIX = "Full Sentry SDK setup for "


def small_config() -> SkillTreeConfig:
    return SkillTreeConfig(
        title="Test Tree",
        intro="Intro text.",
        quick_navigation=[NavigationEntry("Set up Sentry", "sentry-sdk-setup")],
    )


class TestColumnValue:
    """Tests for the per-category column extraction rule."""

    @pytest.mark.parametrize(
        ("description", "expected"),
        [
            ("Full Sentry SDK setup for Python. Use when adding Sentry.", "Python"),
            ("Full Sentry SDK setup for React Native.", "React Native"),
            ("Full Sentry SDK setup for Go", "Go"),
            ("Setup for Ruby. More text.", "Setup for Ruby"),
        ],
    )
    def test_sdk_setup_strips_prefix_then_truncates(self, description: str, expected: str) -> None:
        assert column_value(description, "sdk-setup", SDK_PREFIX) == expected

    def test_prefix_is_only_stripped_for_sdk_setup(self) -> None:
        description = "Full Sentry SDK setup for Python. Extra."
        assert column_value(description, "workflow", SDK_PREFIX) == "Full Sentry SDK setup for Python"

    @pytest.mark.parametrize(
        ("description", "expected"),
        [
            ("Find and fix issues. Uses the MCP server.", "Find and fix issues"),
            ("Review code for Sentry best practices.", "Review code for Sentry best practices"),
            ("No terminator at all", "No terminator at all"),
            ("Keeps SKILL_TREE.md current.", "Keeps SKILL_TREE.md current"),
            ("", ""),
        ],
    )
    def test_other_categories_take_first_sentence(self, description: str, expected: str) -> None:
        assert column_value(description, "workflow", SDK_PREFIX) == expected

    def test_only_first_sentence_is_kept(self) -> None:
        """No fallback to a later sentence."""
        assert first_sentence("One. Two. Three.") == "One"

    def test_only_one_trailing_period_is_dropped(self) -> None:
        assert first_sentence("Ends with ellipsis..") == "Ends with ellipsis."


class TestRenderSection:
    """Tests for a single category table."""

    def test_empty_section_still_has_header(self) -> None:
        lines = render_section("feature-setup", [], SkillTreeConfig())
        assert lines == [
            "",
            "## Feature Setup ([`sentry-feature-setup`](skills/sentry-feature-setup/SKILL.md))",
            "",
            "| Skill | Path | Feature |",
            "|---|---|---|",
        ]

    def test_section_without_router_has_plain_heading(self) -> None:
        lines = render_section("internal", [], SkillTreeConfig())
        assert lines[1] == "## Internal"

    def test_configured_section(self) -> None:
        config = SkillTreeConfig(
            sections={
                **SkillTreeConfig().sections,
                "workflow": SectionConfig("Flows", "my-router", "When"),
            }
        )
        lines = render_section("workflow", [], config)
        assert lines[1] == "## Flows ([`my-router`](skills/my-router/SKILL.md))"
        assert lines[3] == "| Skill | Path | When |"


class TestGenerateSkillTree:
    """Tests for the complete document."""

    def test_full_document(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        write_skill("sentry-sdk-setup", role="router", description="Router for SDK setup.")
        write_skill(
            "sentry-python-sdk",
            category="sdk-setup",
            description="Full Sentry SDK setup for Python. Use when adding Sentry to a Python app.",
        )
        write_skill("sentry-fix-issues", category="workflow", description="Find and fix issues. Uses MCP.")
        write_skill("skill-tree-maintenance", category="internal", description="Keeps SKILL_TREE.md current.")
        write_skill("experimental-skill", category="experimental", description="Not rendered.")

        document = generate_skill_tree(categorize(build_registry(repo, SkillTreeConfig())), small_config())

        assert document == (
            "# Test Tree\n"
            "\n"
            "Intro text.\n"
            "\n"
            "## Quick Navigation\n"
            "\n"
            "| If the user wants to... | Start here |\n"
            "|---|---|\n"
            "| Set up Sentry | [`sentry-sdk-setup`](skills/sentry-sdk-setup/SKILL.md) |\n"
            "\n"
            "## SDK Setup ([`sentry-sdk-setup`](skills/sentry-sdk-setup/SKILL.md))\n"
            "\n"
            "| Skill | Path | Platform |\n"
            "|---|---|---|\n"
            "| [`sentry-python-sdk`](skills/sentry-python-sdk/SKILL.md) | skills/sentry-python-sdk/SKILL.md | Python |\n"
            "\n"
            "## Workflow ([`sentry-workflow`](skills/sentry-workflow/SKILL.md))\n"
            "\n"
            "| Skill | Path | Use when |\n"
            "|---|---|---|\n"
            "| [`sentry-fix-issues`](skills/sentry-fix-issues/SKILL.md) | skills/sentry-fix-issues/SKILL.md"
            " | Find and fix issues |\n"
            "\n"
            "## Feature Setup ([`sentry-feature-setup`](skills/sentry-feature-setup/SKILL.md))\n"
            "\n"
            "| Skill | Path | Feature |\n"
            "|---|---|---|\n"
            "\n"
            "## Internal\n"
            "\n"
            "| Skill | Path | Purpose |\n"
            "|---|---|---|\n"
            "| [`skill-tree-maintenance`](skills/skill-tree-maintenance/SKILL.md)"
            " | skills/skill-tree-maintenance/SKILL.md | Keeps SKILL_TREE.md current |\n"
        )

    def test_default_preamble(self, repo: Path) -> None:
        document = generate_skill_tree(categorize(build_registry(repo, SkillTreeConfig())), SkillTreeConfig())
        assert document.startswith("# Sentry Skill Tree\n\nThis file maps the full skill structure")
        assert "| Configure a specific Sentry feature | [`sentry-feature-setup`]" in document

    def test_rendering_is_idempotent(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        """Two renders of an unchanged tree are byte-identical."""
        write_skill("sentry-fix-issues", category="workflow", description="Fix. Now.")
        write_skill("sentry-code-review", category="workflow", description="Review.")
        first = generate_skill_tree(categorize(build_registry(repo, SkillTreeConfig())), small_config())
        second = generate_skill_tree(categorize(build_registry(repo, SkillTreeConfig())), small_config())
        assert first == second

    def test_rows_follow_path_order(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        write_skill("zz-skill", directory="a-dir", category="workflow", description="First.")
        write_skill("aa-skill", directory="b-dir", category="workflow", description="Second.")
        document = generate_skill_tree(categorize(build_registry(repo, SkillTreeConfig())), small_config())
        assert document.index("zz-skill") < document.index("aa-skill")

    def test_ends_with_single_newline(self, repo: Path) -> None:
        document = generate_skill_tree(categorize(build_registry(repo, SkillTreeConfig())), small_config())
        assert document.endswith("|---|---|---|\n")
        assert not document.endswith("\n\n")
