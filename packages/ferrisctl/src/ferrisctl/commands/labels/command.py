from __future__ import annotations

import argparse
from dataclasses import dataclass, field

from ...core.context import RunContext
from ...core.errors import ScriptError
from ...core.exit_codes import ERR_FAILED, ERR_USAGE
from ...core.process import run_command
from ...core.serialize import dumps_json
from ...core.tools import has_tool
from ...execution.steps import StepRunner
from ...execution.wrapper import finish_lane
from .catalog import CATEGORY_ICONS, category_heading, group_by_category

LANE = "labels"


@dataclass
class LabelSummary:
    created: list[str] = field(default_factory=list)
    existing: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    planned: list[str] = field(default_factory=list)

    def to_json(self) -> dict[str, list[str]]:
        return {
            "created": self.created,
            "existing": self.existing,
            "failed": self.failed,
            "planned": self.planned,
        }


def configure_labels_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = sub.add_parser("labels", help="manage the GitHub issue label catalog")
    labels_sub = parser.add_subparsers(dest="labels_cmd", required=True)
    create = labels_sub.add_parser("create", help="create missing catalog labels with the GitHub CLI")
    create.add_argument("--repo", help="target repository as OWNER/NAME (default: current repository)")
    create.add_argument("--dry-run", action="store_true", help="report what would be created without creating it")
    labels_sub.add_parser("list", help="print the label catalog")


def _repo_args(repo: str | None) -> list[str]:
    return ["--repo", repo] if repo else []


def require_gh(ctx: RunContext) -> None:
    if not has_tool("gh"):
        raise ScriptError(
            "GitHub CLI (gh) is not installed; install it from https://cli.github.com/",
            ERR_FAILED,
            kind="tool_missing",
        )
    auth = run_command(["gh", "auth", "status"], ctx.repo_root, ctx=ctx)
    if auth.code != 0:
        raise ScriptError("Not authenticated with GitHub CLI; run: gh auth login", ERR_FAILED, kind="gh_unauthenticated")


def existing_labels(ctx: RunContext, repo: str | None) -> set[str]:
    res = run_command(
        ["gh", "label", "list", "--limit", "1000", "--json", "name", "--jq", ".[].name", *_repo_args(repo)],
        ctx.repo_root,
        ctx=ctx,
    )
    if res.code != 0:
        ctx.console.warning("Could not list existing labels; every label will be attempted")
        return set()
    return {line.strip() for line in res.stdout.splitlines() if line.strip()}


def create_labels(ctx: RunContext, repo: str | None, dry_run: bool) -> int:
    console = ctx.console
    repo = repo or ctx.config.labels_repository
    console.line("🏷️  Creating GitHub Labels...")
    console.line()
    require_gh(ctx)
    existing = existing_labels(ctx, repo)
    summary = LabelSummary()

    for category, labels in group_by_category(ctx.config.labels):
        console.line(category_heading(category))
        for label in labels:
            if label.name in existing:
                summary.existing.append(label.name)
                console.line(f"  ⏭️  Already exists: {label.name}")
                continue
            if dry_run:
                summary.planned.append(label.name)
                console.line(f"  📝 Would create: {label.name}")
                continue
            res = run_command(
                [
                    "gh",
                    "label",
                    "create",
                    label.name,
                    "--description",
                    label.description,
                    "--color",
                    label.color,
                    *_repo_args(repo),
                ],
                ctx.repo_root,
                ctx=ctx,
            )
            if res.ok:
                summary.created.append(label.name)
                existing.add(label.name)
                console.line(f"  ✅ Created: {label.name}")
            elif "already exists" in res.combined_output.lower():
                summary.existing.append(label.name)
                console.line(f"  ⏭️  Already exists: {label.name}")
            else:
                summary.failed.append(label.name)
                console.warning(f"Failed to create {label.name}: {res.combined_output or f'exit {res.code}'}")
        console.line()

    console.line(f"Created: {len(summary.created)}, already existing: {len(summary.existing)}")
    if dry_run:
        console.line(f"Would create: {len(summary.planned)}")
    warnings = [f"failed to create label: {name}" for name in summary.failed]
    if summary.failed:
        console.line("Labels that could not be created:")
        for name in summary.failed:
            console.line(f"  - {name}")
    notes = (
        "",
        "Next steps:",
        "1. Verify labels: gh label list",
        "2. Start using labels on issues and PRs",
    )
    finish_lane(
        ctx,
        LANE,
        StepRunner(ctx),
        exit_code=0,
        success="Label creation complete!",
        failure="",
        notes=notes,
        warnings=warnings,
        extra={"repository": repo, "dry_run": dry_run, "labels": summary.to_json()},
    )
    return 0


def list_labels(ctx: RunContext) -> int:
    labels = ctx.config.labels
    if ctx.json_output:
        rows = [
            {"name": l.name, "description": l.description, "color": l.color, "category": l.category}
            for l in labels
        ]
        print(dumps_json({"schema_version": 1, "tool": "ferrisctl", "status": "ok", "run_id": ctx.run_id, "labels": rows}))
        return 0
    for category, group in group_by_category(labels):
        ctx.console.line(f"{CATEGORY_ICONS.get(category, '•')} {category}")
        for label in group:
            ctx.console.line(f"  #{label.color}  {label.name}  {label.description}")
    return 0


def run_labels_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ns.labels_cmd == "create":
        return create_labels(ctx, ns.repo, ns.dry_run)
    if ns.labels_cmd == "list":
        return list_labels(ctx)
    raise ScriptError(f"unsupported labels command: {ns.labels_cmd}", ERR_USAGE, kind="usage")
