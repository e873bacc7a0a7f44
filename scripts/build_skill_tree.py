#!/usr/bin/env python3
"""
Skill Tree Builder - Generate and validate the skill tree

Scans all skills/**/SKILL.md files, regenerates SKILL_TREE.md, validates
the skill hierarchy, and checks breadcrumb links.

Pipeline:
    Scanning -> Generating -> Validating -> Comparing
        -> Reporting-Clean | Reporting-Stale | Writing -> Done

Generation and validation always run to completion. In check mode a stale
or missing SKILL_TREE.md is reported as an error and nothing is written;
in write mode the file is atomically replaced.

Usage:
    python scripts/build_skill_tree.py           # regenerate + validate
    python scripts/build_skill_tree.py --check   # validate only (no write)

Exit codes:
    0 - All checks passed (warnings allowed)
    1 - Errors found (validation, staleness, or a fatal error)
"""

from __future__ import annotations

import argparse
import difflib
import enum
import json
import sys
from dataclasses import dataclass, field
from pathlib import Path

from skill_categorize import categorize
from skill_registry import SkillRegistry, build_registry
from skill_tree_common import (
    EXIT_ERRORS,
    SkillTreeError,
    ValidationReport,
    atomic_write_text,
    get_repo_root,
    print_errors,
    print_verbose_results,
    print_warnings,
)
from skill_tree_config import SkillTreeConfig, load_config
from skill_tree_generate import generate_skill_tree
from skill_tree_validate import validate_registry

REGENERATE_COMMAND = "scripts/build_skill_tree.py"


class SyncState(enum.Enum):
    SCANNING = "scanning"
    GENERATING = "generating"
    VALIDATING = "validating"
    COMPARING = "comparing"
    REPORTING_CLEAN = "reporting-clean"
    REPORTING_STALE = "reporting-stale"
    WRITING = "writing"
    DONE = "done"


@dataclass
class SyncResult:
    """Outcome of one pipeline run.

    Attributes:
        registry: The scanned registry
        generated: Freshly rendered tree document
        report: Validation findings plus any staleness error
        outcome: REPORTING_CLEAN, REPORTING_STALE or WRITING
        existed: Whether the artifact existed before the run
        diff: Unified diff lines (existing -> generated), empty when equal
        trace: States visited, in order
    """

    registry: SkillRegistry
    generated: str
    report: ValidationReport
    outcome: SyncState
    existed: bool
    diff: list[str] = field(default_factory=list)
    trace: list[SyncState] = field(default_factory=list)

    @property
    def exit_code(self) -> int:
        return self.report.exit_code


def normalize_document(text: str) -> str:
    """Drop trailing newlines so comparison ignores the file's final newline."""
    return text.rstrip("\n")


def diff_documents(existing: str, generated: str, name: str) -> list[str]:
    return list(
        difflib.unified_diff(
            normalize_document(existing).split("\n"),
            normalize_document(generated).split("\n"),
            fromfile=f"{name} (existing)",
            tofile=f"{name} (generated)",
            lineterm="",
        )
    )


def read_artifact(path: Path) -> str | None:
    """Return the persisted tree document, or None when it does not exist.

    Raises:
        SkillTreeError: if the file exists but cannot be read
    """
    if not path.exists():
        return None
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SkillTreeError(f"Could not read {path}: {e}") from e


def sync_skill_tree(root: Path, config: SkillTreeConfig, check_only: bool = False) -> SyncResult:
    """Run the full scan / generate / validate / compare pipeline.

    Args:
        root: Repository root
        config: Loaded configuration
        check_only: Report staleness instead of writing

    Returns:
        SyncResult describing what happened

    Raises:
        SkillTreeError: on fatal I/O errors or duplicate skill names
    """
    trace = [SyncState.SCANNING]
    registry = build_registry(root, config)

    trace.append(SyncState.GENERATING)
    generated = generate_skill_tree(categorize(registry), config)

    trace.append(SyncState.VALIDATING)
    report = ValidationReport()
    report.merge(validate_registry(registry))

    trace.append(SyncState.COMPARING)
    tree_path = root / config.tree_file
    existing = read_artifact(tree_path)
    diff: list[str] = []

    if existing is not None and normalize_document(existing) == normalize_document(generated):
        outcome = SyncState.REPORTING_CLEAN
    else:
        if existing is not None:
            diff = diff_documents(existing, generated, config.tree_file)
        if check_only:
            outcome = SyncState.REPORTING_STALE
            if existing is None:
                report.error(f"{config.tree_file} does not exist. Run {REGENERATE_COMMAND} to generate.")
            else:
                report.error(f"{config.tree_file} is stale. Run {REGENERATE_COMMAND} to regenerate.")
        else:
            outcome = SyncState.WRITING
            try:
                atomic_write_text(tree_path, normalize_document(generated) + "\n")
            except OSError as e:
                raise SkillTreeError(f"Could not write {tree_path}: {e}") from e

    trace.extend([outcome, SyncState.DONE])
    return SyncResult(
        registry=registry,
        generated=generated,
        report=report,
        outcome=outcome,
        existed=existing is not None,
        diff=diff,
        trace=trace,
    )


# =============================================================================
# Output
# =============================================================================


def print_sync_result(result: SyncResult, config: SkillTreeConfig, verbose: bool = False) -> None:
    """Print the human-readable run report."""
    tree_file = config.tree_file
    print(f"Scanning {len(result.registry)} skills in {config.skills_dir}/...")
    print_warnings(result.report)

    if result.diff:
        print("")
        print(f"{tree_file} diff (existing -> generated):")
        for line in result.diff:
            print(line)
        print("")

    if result.outcome is SyncState.REPORTING_CLEAN:
        print(f"{tree_file} is up to date.")
    elif result.outcome is SyncState.WRITING:
        if result.existed:
            print(f"{tree_file} is stale, regenerating...")
            print(f"{tree_file} updated.")
        else:
            print(f"{tree_file} created.")

    if verbose:
        print_verbose_results(result.report)

    registry = result.registry
    errors = result.report.errors
    print("")
    print(f"Summary: {len(registry)} skills scanned, {len(registry.routers())} routers, {len(errors)} errors")
    print_errors(result.report)
    if not errors:
        print("All checks passed.")


# =============================================================================
# CLI Entry Point
# =============================================================================


def main(argv: list[str] | None = None) -> int:
    """CLI entry point.

    Returns:
        Exit code (0=OK, 1=errors)
    """
    parser = argparse.ArgumentParser(
        description="Generate SKILL_TREE.md and validate the skill hierarchy",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python scripts/build_skill_tree.py           # regenerate + validate
    python scripts/build_skill_tree.py --check   # validate only (no write)

Exit codes:
    0 - All checks passed
    1 - Errors found
        """,
    )
    parser.add_argument("--check", action="store_true", help="Validate only; report a stale tree instead of writing")
    parser.add_argument("--root", type=Path, default=None, help="Repository root (default: parent of scripts/)")
    parser.add_argument("--config", type=Path, default=None, help="Path to skill-tree.yaml")
    parser.add_argument("--verbose", "-v", action="store_true", help="Show PASSED results")
    parser.add_argument("--json", "-j", action="store_true", help="Output results as JSON")
    args = parser.parse_args(argv)

    root = (args.root or get_repo_root()).resolve()
    try:
        config = load_config(root, args.config)
        result = sync_skill_tree(root, config, check_only=args.check)
    except SkillTreeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_ERRORS

    if args.json:
        payload = result.report.to_dict()
        payload["skills"] = len(result.registry)
        payload["routers"] = len(result.registry.routers())
        payload["outcome"] = result.outcome.value
        payload["diff"] = result.diff
        print(json.dumps(payload, indent=2))
    else:
        print_sync_result(result, config, verbose=args.verbose)
    return result.exit_code


if __name__ == "__main__":
    sys.exit(main())
