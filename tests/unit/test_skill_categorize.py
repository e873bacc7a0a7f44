#!/usr/bin/env python3
"""Tests for skill_categorize.py - router and category buckets."""

from collections.abc import Callable
from pathlib import Path

from skill_categorize import categorize
from skill_registry import build_registry
from skill_tree_config import SkillTreeConfig


class TestCategorize:
    """Tests for partitioning the registry."""

    def test_router_with_category_goes_only_to_routers(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        """role: router wins over any category value."""
        write_skill("sentry-workflow", role="router", category="workflow")
        result = categorize(build_registry(repo, SkillTreeConfig()))
        assert [s.name for s in result.routers] == ["sentry-workflow"]
        assert result.bucket("workflow") == []

    def test_known_categories_are_bucketed(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        write_skill("sentry-python-sdk", category="sdk-setup")
        write_skill("sentry-fix-issues", category="workflow")
        write_skill("sentry-crons", category="feature-setup")
        write_skill("skill-tree-maintenance", category="internal")
        result = categorize(build_registry(repo, SkillTreeConfig()))
        assert [s.name for s in result.bucket("sdk-setup")] == ["sentry-python-sdk"]
        assert [s.name for s in result.bucket("workflow")] == ["sentry-fix-issues"]
        assert [s.name for s in result.bucket("feature-setup")] == ["sentry-crons"]
        assert [s.name for s in result.bucket("internal")] == ["skill-tree-maintenance"]
        assert result.routers == []

    def test_unknown_and_empty_categories_are_not_bucketed(
        self, repo: Path, write_skill: Callable[..., Path]
    ) -> None:
        """Skills without a recognized category appear in no generation bucket."""
        write_skill("experimental-skill", category="experimental")
        write_skill("bare-skill")
        result = categorize(build_registry(repo, SkillTreeConfig()))
        assert all(not skills for skills in result.by_category.values())
        assert [s.name for s in result.uncategorized] == ["bare-skill", "experimental-skill"]

    def test_bucket_order_follows_discovery_path(self, repo: Path, write_skill: Callable[..., Path]) -> None:
        """Rows keep path order, not name order."""
        write_skill("b-name", directory="a-path", category="workflow")
        write_skill("a-name", directory="b-path", category="workflow")
        result = categorize(build_registry(repo, SkillTreeConfig()))
        assert [s.name for s in result.bucket("workflow")] == ["b-name", "a-name"]
