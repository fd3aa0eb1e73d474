"""Checks executed by the installed git hooks."""

from __future__ import annotations

from ...core.context import RunContext
from ...core.git import changed_files_since_upstream
from ...core.tools import has_tool
from ...execution.steps import Step, StepRunner
from ...execution.wrapper import finish_lane
from ..cargo.plan import pre_commit_steps

MARKDOWNLINT_CMD = ("npx", "markdownlint", "**/*.md", "--ignore", "node_modules", "--ignore", "target", "--dot")
PUSH_ANYWAY = "Pushing anyway (checks will run in CI)..."
PRE_COMMIT_MESSAGES: tuple[tuple[str, str], ...] = (
    ("Formatting OK", "Code formatting check failed!"),
    ("Linting OK", "Linting failed!"),
    ("Tests OK", "Tests failed!"),
)


def changed_markdown(ctx: RunContext) -> list[str]:
    return [path for path in changed_files_since_upstream(ctx.repo_root) if path.endswith(".md")]


def _skip_pre_push(ctx: RunContext, runner: StepRunner, message: str, reason: str, changed: list[str]) -> int:
    finish_lane(
        ctx,
        "pre-push",
        runner,
        exit_code=0,
        success=message,
        failure="",
        warnings=[reason],
        extra={"changed_markdown": changed, "skipped": True},
    )
    return 0


def run_pre_push(ctx: RunContext) -> int:
    """Lint changed markdown before a push; every skip still allows the push."""
    console = ctx.console
    runner = StepRunner(ctx)
    console.line()
    console.line("🔍 Running pre-push documentation checks...")
    console.line()

    changed = changed_markdown(ctx)
    if not changed:
        return _skip_pre_push(
            ctx,
            runner,
            "No markdown files changed, skipping documentation checks",
            "no markdown files changed since upstream",
            changed,
        )
    console.line("📄 Markdown files changed:")
    for path in changed:
        console.line(f"   - {path}")
    console.line()

    if not has_tool("node"):
        console.warning("Node.js not installed - skipping documentation checks")
        console.line("   Install Node.js to enable pre-push documentation validation")
        console.line("   Download: https://nodejs.org/")
        return _skip_pre_push(ctx, runner, PUSH_ANYWAY, "node not installed; documentation checks skipped", changed)

    if not (ctx.repo_root / "node_modules").is_dir():
        console.line("📦 Installing npm dependencies...")
        if not runner.run(Step("Installing npm dependencies", ("npm", "install", "--silent"))).ok:
            console.line()
            console.error("Failed to install npm dependencies")
            console.line("   Run manually: npm install")
            return _skip_pre_push(ctx, runner, PUSH_ANYWAY, "npm install failed; documentation checks skipped", changed)

    console.line("🔧 Running markdownlint...")
    lint = runner.run(Step("markdownlint", MARKDOWNLINT_CMD))
    extra = {"changed_markdown": changed, "skipped": False}
    if not lint.ok:
        finish_lane(
            ctx,
            "pre-push",
            runner,
            exit_code=1,
            success="",
            failure="Documentation linting failed!",
            extra=extra,
        )
        console.line()
        console.line("To fix automatically, run:")
        console.line("   npm run docs:fix")
        console.line()
        console.line("To bypass this check (not recommended):")
        console.line("   git push --no-verify")
        console.line()
        return 1
    finish_lane(ctx, "pre-push", runner, exit_code=0, success="Documentation checks passed!", failure="", extra=extra)
    return 0


def run_pre_commit(ctx: RunContext) -> int:
    console = ctx.console
    runner = StepRunner(ctx)
    console.line("🔍 Running pre-commit checks...")
    console.line()
    for step, (ok_message, fail_message) in zip(pre_commit_steps(), PRE_COMMIT_MESSAGES):
        console.line(f"{step.label}...")
        if not runner.run(step).ok:
            console.error(fail_message)
            console.line(step.hint)
            break
        console.success(ok_message)
        console.line()
    code = runner.exit_code
    finish_lane(
        ctx,
        "pre-commit",
        runner,
        exit_code=code,
        success="All pre-commit checks passed! Proceeding with commit...",
        failure="Pre-commit checks failed; commit aborted",
    )
    return code
