from __future__ import annotations

import argparse

from ...core.context import RunContext
from ...core.exit_codes import ERR_FAILED
from ...core.paths import display_path, resolve_under
from ...core.tools import has_tool
from ...execution.steps import StepRunner
from ...execution.wrapper import explain_steps, finish_lane
from .plan import COVERAGE_TOOLS, coverage_install_steps, coverage_report_files, coverage_run_steps

LANE = "coverage"


def run_coverage(ctx: RunContext, ns: argparse.Namespace) -> int:
    console = ctx.console
    backend = ns.backend or ctx.config.coverage_backend
    output_path = resolve_under(ctx.repo_root, ns.output_dir or ctx.config.coverage_output_dir)
    output_dir = display_path(ctx.repo_root, output_path)
    tool = COVERAGE_TOOLS[backend]
    tool_present = has_tool(tool)
    install = [] if tool_present else coverage_install_steps(backend)
    steps = coverage_run_steps(backend, output_dir)
    if ns.explain:
        return explain_steps(ctx, LANE, [*install, *steps])

    runner = StepRunner(ctx)
    extra = {"backend": backend, "output_dir": output_dir}
    console.line("🔍 Running test coverage analysis...")
    if not tool_present:
        if ns.no_install:
            message = f"{tool} not found and --no-install was given"
            console.error(message)
            finish_lane(ctx, LANE, runner, exit_code=ERR_FAILED, success="", failure=message, errors=[message], extra=extra)
            return ERR_FAILED
        console.error(f"{tool} not found. Installing...")
        for step in install:
            console.line(f"📦 {step.label}...")
            if not runner.run(step).ok:
                message = f"failed to install {tool}"
                finish_lane(ctx, LANE, runner, exit_code=ERR_FAILED, success="", failure=message, errors=[message], extra=extra)
                return ERR_FAILED

    output_path.mkdir(parents=True, exist_ok=True)
    console.line("📊 Analyzing coverage across workspace...")
    for step in steps:
        if not runner.run(step).ok:
            break
    code = runner.exit_code
    reports = coverage_report_files(backend, output_dir)
    extra["reports"] = reports
    notes = (
        "",
        "📄 Reports generated:",
        f"  - HTML: {reports['html']}",
        f"  - LCOV: {reports['lcov']}",
        "",
        "🌐 Open HTML report:",
        f"  xdg-open {reports['html']}  # Linux",
        f"  open {reports['html']}      # macOS",
    )
    failed = runner.first_failure
    failure = f"coverage failed: {failed.command} exited with {failed.exit_code}" if failed is not None else "coverage failed"
    finish_lane(ctx, LANE, runner, exit_code=code, success="Coverage analysis complete!", failure=failure, notes=notes, extra=extra)
    return code
