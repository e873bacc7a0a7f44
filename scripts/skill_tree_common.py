#!/usr/bin/env python3
"""
Skill Tree Builder - Common Module

Shared infrastructure for the skill tree scripts.
This module contains:
- Type definitions (Level, ValidationResult, ValidationReport)
- Exception hierarchy for fatal errors
- Common constants (categories, markers, exit codes)
- Utility functions (formatting, atomic writes, repo root lookup)

All skill tree scripts import from this module to ensure consistency.
"""

from __future__ import annotations

import json
import os
import sys
import tempfile
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

# Finding severity levels
# - ERROR: fails the run (non-zero exit code)
# - WARNING: never blocks, always reported
# - PASSED: check passed, shown in verbose mode
Level = Literal["ERROR", "WARNING", "PASSED"]

# =============================================================================
# Exit Codes
# =============================================================================

EXIT_OK = 0  # No errors (warnings allowed)
EXIT_ERRORS = 1  # Validation errors, staleness, or a fatal error

# =============================================================================
# Common Constants
# =============================================================================

# Fixed category enum used to bucket leaf skills
KNOWN_CATEGORIES = ("sdk-setup", "workflow", "feature-setup", "internal")

# Role value that marks a hierarchy root
ROUTER_ROLE = "router"

# Line prefix of navigational breadcrumb lines
BREADCRUMB_PREFIX = "> "

# Extension of skill documents (breadcrumb links must end with it)
DOCUMENT_EXTENSION = ".md"


# =============================================================================
# Exceptions
# =============================================================================


class SkillTreeError(Exception):
    """Base class for fatal errors that abort the whole run."""


class RegistryError(SkillTreeError):
    """Skill documents could not be discovered or read."""


class DuplicateSkillError(RegistryError):
    """Two skill documents declare the same name."""


class ConfigError(SkillTreeError):
    """The configuration file is unreadable or invalid."""


# =============================================================================
# Data Classes
# =============================================================================


@dataclass
class ValidationResult:
    """Single validation finding.

    Attributes:
        level: Severity level (ERROR, WARNING, PASSED)
        message: Human-readable cause
        skill: Name of the offending skill, if any
        file: Optional repo-relative file path related to the finding
    """

    level: Level
    message: str
    skill: str | None = None
    file: str | None = None

    def __str__(self) -> str:
        if self.skill:
            return f"{self.skill}: {self.message}"
        return self.message

    def to_dict(self) -> dict[str, str]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, str] = {"level": self.level, "message": self.message}
        if self.skill is not None:
            result["skill"] = self.skill
        if self.file is not None:
            result["file"] = self.file
        return result


@dataclass
class ValidationReport:
    """Collection of validation findings.

    Findings are accumulated, never raised: every check runs to completion
    so an operator sees all defects from a single run. Reports produced by
    independent checks are combined with merge().
    """

    results: list[ValidationResult] = field(default_factory=list)

    def add(
        self,
        level: Level,
        message: str,
        skill: str | None = None,
        file: str | None = None,
    ) -> None:
        """Add a validation result."""
        self.results.append(ValidationResult(level, message, skill, file))

    def error(self, message: str, skill: str | None = None, file: str | None = None) -> None:
        """Add an error (fails the run)."""
        self.add("ERROR", message, skill, file)

    def warning(self, message: str, skill: str | None = None, file: str | None = None) -> None:
        """Add a warning — always reported, never fails the run."""
        self.add("WARNING", message, skill, file)

    def passed(self, message: str, skill: str | None = None, file: str | None = None) -> None:
        """Add a passed check."""
        self.add("PASSED", message, skill, file)

    @property
    def errors(self) -> list[ValidationResult]:
        return [r for r in self.results if r.level == "ERROR"]

    @property
    def warnings(self) -> list[ValidationResult]:
        return [r for r in self.results if r.level == "WARNING"]

    @property
    def has_errors(self) -> bool:
        """Check if any ERROR results exist."""
        return any(r.level == "ERROR" for r in self.results)

    @property
    def exit_code(self) -> int:
        """Exit code for this report. Warnings never affect it."""
        return EXIT_ERRORS if self.has_errors else EXIT_OK

    def count_by_level(self) -> dict[str, int]:
        """Get count of results by level."""
        counts: dict[str, int] = {"ERROR": 0, "WARNING": 0, "PASSED": 0}
        for r in self.results:
            counts[r.level] = counts.get(r.level, 0) + 1
        return counts

    def merge(self, other: "ValidationReport") -> None:
        """Merge results from another report into this one."""
        self.results.extend(other.results)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "exit_code": self.exit_code,
            "counts": self.count_by_level(),
            "results": [r.to_dict() for r in self.results],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert report to JSON string.

        Args:
            indent: JSON indentation level (default 2)

        Returns:
            JSON string representation of the report
        """
        return json.dumps(self.to_dict(), indent=indent)


# =============================================================================
# Utility Functions
# =============================================================================


def get_repo_root() -> Path:
    """Get the repository root directory (parent of scripts/).

    Returns:
        Path to the repo root, assuming this module lives in scripts/.
    """
    return Path(__file__).resolve().parent.parent


def atomic_write_text(path: Path, content: str) -> None:
    """Write text atomically using temp file + rename.

    Writes to a temporary file in the same directory as the target,
    then uses os.replace() for an atomic replacement. Readers never
    observe a partially written file.

    Args:
        path: Destination file path.
        content: Text to write (UTF-8).
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory as the target so the rename stays on one filesystem
    fd, tmp_path_str = tempfile.mkstemp(
        dir=str(path.parent),
        prefix=f".{path.name}.",
        suffix=".tmp",
    )
    tmp_path = Path(tmp_path_str)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as tmp_file:
            tmp_file.write(content)
        os.replace(tmp_path, path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


# =============================================================================
# Color Formatting (for terminal output)
# =============================================================================

# ANSI color codes
COLORS = {
    "ERROR": "\033[91m",  # Red
    "WARNING": "\033[95m",  # Magenta — never blocks, always reported
    "PASSED": "\033[92m",  # Green
    "RESET": "\033[0m",  # Reset
    "BOLD": "\033[1m",  # Bold
}


def use_color(stream: object = None) -> bool:
    """Return True when ANSI colors should be emitted on the given stream."""
    if os.environ.get("NO_COLOR"):
        return False
    stream = stream if stream is not None else sys.stdout
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def colorize(text: str, level: str, enabled: bool = True) -> str:
    """Apply color to text based on level."""
    if not enabled:
        return text
    color = COLORS.get(level, "")
    return f"{color}{text}{COLORS['RESET']}"


def format_result(result: ValidationResult, enabled: bool = True) -> str:
    """Format a single validation result for terminal output.

    Errors render as "ERROR: <skill>: <message>", warnings as
    "WARN: <skill>: <message>".
    """
    tag = "WARN" if result.level == "WARNING" else result.level
    return f"{colorize(tag + ':', result.level, enabled)} {result}"


def print_warnings(report: ValidationReport) -> None:
    """Print every warning to stderr."""
    enabled = use_color(sys.stderr)
    for result in report.warnings:
        print(format_result(result, enabled), file=sys.stderr)


def print_errors(report: ValidationReport) -> None:
    """Print the itemized error list (nothing when there are no errors)."""
    errors = report.errors
    if not errors:
        return
    enabled = use_color()
    print("")
    print(colorize("Errors:", "BOLD", enabled))
    for result in errors:
        print(f"  {format_result(result, enabled)}")


def print_verbose_results(report: ValidationReport) -> None:
    """Print PASSED results (verbose mode only)."""
    enabled = use_color()
    results = [r for r in report.results if r.level == "PASSED"]
    if results:
        header = colorize(f"--- PASSED ({len(results)}) ---", "PASSED", enabled)
        print(f"\n{header}")
        for result in results:
            print(f"  {format_result(result, enabled)}")
