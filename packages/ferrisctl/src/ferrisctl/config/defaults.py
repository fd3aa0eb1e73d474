from __future__ import annotations

from typing import Any

LABEL_CATEGORIES: tuple[str, ...] = ("Priority", "Type", "Status", "Difficulty", "Component")

DEFAULT_LABELS: tuple[dict[str, str], ...] = (
    {"name": "P0-Critical", "description": "Critical bugs or blockers requiring immediate attention", "color": "d73a4a", "category": "Priority"},
    {"name": "P1-High", "description": "High priority tasks that should be addressed soon", "color": "ff6600", "category": "Priority"},
    {"name": "P2-Medium", "description": "Medium priority tasks for regular workflow", "color": "fbca04", "category": "Priority"},
    {"name": "P3-Low", "description": "Low priority tasks or nice-to-have improvements", "color": "0e8a16", "category": "Priority"},
    {"name": "bug", "description": "Something isn't working correctly", "color": "d73a4a", "category": "Type"},
    {"name": "feature", "description": "New feature or functionality request", "color": "a2eeef", "category": "Type"},
    {"name": "documentation", "description": "Documentation improvements or additions", "color": "0075ca", "category": "Type"},
    {"name": "enhancement", "description": "Improvement to existing functionality", "color": "84b6eb", "category": "Type"},
    {"name": "question", "description": "Questions or clarifications needed", "color": "d876e3", "category": "Type"},
    {"name": "discussion", "description": "General discussion topics", "color": "cc317c", "category": "Type"},
    {"name": "needs-triage", "description": "New issue awaiting initial review and prioritization", "color": "e4e669", "category": "Status"},
    {"name": "in-progress", "description": "Work is actively being done on this issue", "color": "fbca04", "category": "Status"},
    {"name": "blocked", "description": "Blocked by external dependencies or decisions", "color": "b60205", "category": "Status"},
    {"name": "wontfix", "description": "Issue will not be addressed (with explanation)", "color": "ffffff", "category": "Status"},
    {"name": "good-first-issue", "description": "Good for newcomers to the project", "color": "7057ff", "category": "Difficulty"},
    {"name": "intermediate", "description": "Requires moderate knowledge of codebase", "color": "008672", "category": "Difficulty"},
    {"name": "advanced", "description": "Requires deep understanding of architecture", "color": "5319e7", "category": "Difficulty"},
    {"name": "compiler", "description": "Related to compiler crate (lexer, parser, type checker)", "color": "1d76db", "category": "Component"},
    {"name": "runtime", "description": "Related to runtime crate (execution environment)", "color": "0e8a16", "category": "Component"},
    {"name": "godot-bind", "description": "Related to Godot GDExtension bindings", "color": "fbca04", "category": "Component"},
    {"name": "docs", "description": "Related to documentation (not code)", "color": "0075ca", "category": "Component"},
    {"name": "ci", "description": "Related to CI/CD, GitHub Actions, workflows", "color": "ededed", "category": "Component"},
)


def default_config() -> dict[str, Any]:
    return {
        "project_name": "FerrisScript",
        "cargo": {"bench_package": "ferrisscript_compiler"},
        "coverage": {"backend": "llvm-cov", "output_dir": "target/coverage"},
        "harness": {"package": "ferrisscript_test_harness", "binary": "ferris-test"},
        "docs": {
            "ignore_dirs": ["node_modules", "target", ".git"],
            "link_check_config": ".markdown-link-check.json",
        },
        "labels": {"repository": None, "catalog": [dict(row) for row in DEFAULT_LABELS]},
    }
