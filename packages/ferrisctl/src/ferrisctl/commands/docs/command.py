from __future__ import annotations

import argparse

from ...core.context import RunContext
from ...core.errors import ScriptError
from ...core.exit_codes import ERR_FAILED, ERR_USAGE
from ...core.tools import has_tool
from ...execution.steps import Step, StepRunner
from ...execution.wrapper import finish_lane
from .link_check import markdown_files, run_link_checks

LANE = "docs-lint"


def configure_docs_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = sub.add_parser("docs", help="documentation checks")
    docs_sub = parser.add_subparsers(dest="docs_cmd", required=True)
    lint = docs_sub.add_parser("lint", help="run markdownlint and markdown-link-check over all markdown files")
    lint.add_argument("--fix", action="store_true", help="let markdownlint auto-fix issues (npm run docs:fix)")
    lint.add_argument("--jobs", type=int, default=1, help="parallel link-check workers")


def run_docs_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ns.docs_cmd == "lint":
        if ns.jobs < 1:
            raise ScriptError("--jobs must be at least 1", ERR_USAGE, kind="usage")
        return run_docs_lint(ctx, fix=ns.fix, jobs=ns.jobs)
    raise ScriptError(f"unsupported docs command: {ns.docs_cmd}", ERR_USAGE, kind="usage")


def run_docs_lint(ctx: RunContext, *, fix: bool, jobs: int = 1) -> int:
    console = ctx.console
    cfg = ctx.config
    runner = StepRunner(ctx)
    extra: dict[str, object] = {"fix": fix}
    console.line()
    console.line(f"=== {cfg.project_name} Documentation Linting ===")
    console.line()

    if not has_tool("node"):
        message = "Node.js is not installed. Please install Node.js to run documentation linting."
        console.error(message)
        console.line("   Download from: https://nodejs.org/")
        finish_lane(ctx, LANE, runner, exit_code=ERR_FAILED, success="", failure="documentation linting skipped", errors=[message], extra=extra)
        return ERR_FAILED

    if not (ctx.repo_root / "node_modules").is_dir():
        console.line("📦 Installing npm dependencies...")
        install = runner.run(Step("Installing npm dependencies", ("npm", "install")))
        console.line()
        if not install.ok:
            finish_lane(ctx, LANE, runner, exit_code=install.exit_code, success="", failure="npm install failed", extra=extra)
            return install.exit_code

    console.line("🔍 Step 1/2: Running markdownlint...")
    if fix:
        console.line("   Mode: Fix (will auto-fix issues)")
        lint = runner.run(Step("markdownlint (fix)", ("npm", "run", "docs:fix")))
    else:
        console.line("   Mode: Check only")
        lint = runner.run(Step("markdownlint", ("npm", "run", "docs:lint")))
    console.line()

    console.line("🔗 Step 2/2: Running markdown-link-check...")
    files = markdown_files(ctx.repo_root, cfg.docs_ignore_dirs)
    link_config = cfg.link_check_config if (ctx.repo_root / cfg.link_check_config).is_file() else None
    results = run_link_checks(ctx, files, link_config, jobs=jobs)
    for result in results:
        console.line(f"   Checking: {result.path}")
        if result.dead_links:
            console.error(f"   Dead links in: {result.path}")
            for line in result.dead_links:
                console.line(f"      {line}")
        elif not result.ok:
            console.error(f"   markdown-link-check could not run for: {result.path}")
    links_ok = all(result.ok for result in results)
    console.line()
    console.line(f"   Files checked: {len(results)}")
    if not links_ok:
        console.line("   Dead links found!")
    console.line()

    errors: list[str] = []
    console.line("=== Summary ===")
    if not lint.ok:
        errors.append("markdownlint found issues")
        console.error("Markdownlint found issues")
        if not fix:
            console.line("   Run with --fix to auto-fix: ferrisctl docs lint --fix")
    if not links_ok:
        errors.append("broken links found")
        console.error("Broken links found")
    extra["files_checked"] = len(results)
    extra["link_check"] = [result.to_json() for result in results if not result.ok]
    code = 0 if (lint.ok and links_ok) else ERR_FAILED
    finish_lane(
        ctx,
        LANE,
        runner,
        exit_code=code,
        success="All documentation checks passed!",
        failure="Documentation checks failed",
        errors=errors,
        extra=extra,
    )
    return code
