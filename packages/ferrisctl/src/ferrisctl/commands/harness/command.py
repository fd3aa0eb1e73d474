from __future__ import annotations

import argparse

from ...core.context import RunContext
from ...core.errors import ScriptError
from ...core.exit_codes import ERR_USAGE
from ...execution.steps import Step, StepRunner
from ...execution.wrapper import finish_lane

LANE = "harness"
HARNESS_FORMATS = ("console", "json", "tap")


def configure_harness_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = sub.add_parser("harness", help="FerrisScript headless test harness")
    harness_sub = parser.add_subparsers(dest="harness_cmd", required=True)
    run = harness_sub.add_parser("run", help="build and run the ferris-test harness binary")
    run.add_argument("--script", help="run a single script file")
    run.add_argument("--all", action="store_true", help="run every test script")
    run.add_argument("--fast", action="store_true", help="skip the release build step")
    run.add_argument("--verbose", dest="harness_verbose", action="store_true", help="verbose harness output")
    run.add_argument("--filter", help="only run tests whose name matches PATTERN")
    run.add_argument("--format", dest="harness_format", choices=HARNESS_FORMATS, help="harness report format")


def build_step(package: str) -> Step:
    return Step("Building test harness", ("cargo", "build", "--release", "-p", package), "Fix the build errors above and rerun")


def harness_step(
    binary: str,
    *,
    script: str | None = None,
    run_all: bool = False,
    pattern: str | None = None,
    verbose: bool = False,
    fmt: str | None = None,
) -> Step:
    args: list[str] = []
    if script:
        args += ["--script", script]
    if run_all:
        args.append("--all")
    if pattern:
        args += ["--filter", pattern]
    if verbose:
        args.append("--verbose")
    if fmt:
        args += ["--format", fmt]
    return Step("Running tests", ("cargo", "run", "--release", "--bin", binary, "--", *args))


def run_harness(ctx: RunContext, ns: argparse.Namespace) -> int:
    console = ctx.console
    cfg = ctx.config
    runner = StepRunner(ctx)
    extra = {"fast": ns.fast, "script": ns.script, "filter": ns.filter}

    if not ns.fast:
        console.line("Building test harness in release mode...", style="yellow")
        build = runner.run(build_step(cfg.harness_package))
        if not build.ok:
            console.error("Build failed!")
            finish_lane(ctx, LANE, runner, exit_code=build.exit_code, success="", failure="Build failed!", extra=extra)
            return build.exit_code
        console.success("Build complete")
        console.line()

    step = harness_step(
        cfg.harness_binary,
        script=ns.script,
        run_all=ns.all,
        pattern=ns.filter,
        verbose=ns.harness_verbose,
        fmt=ns.harness_format,
    )
    console.line(f"Running: {step.command}", style="cyan")
    console.line()
    outcome = runner.run(step)
    finish_lane(
        ctx,
        LANE,
        runner,
        exit_code=outcome.exit_code,
        success="All tests passed!",
        failure=f"Tests failed with exit code {outcome.exit_code}",
        extra=extra,
    )
    return outcome.exit_code


def run_harness_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    if ns.harness_cmd == "run":
        return run_harness(ctx, ns)
    raise ScriptError(f"unsupported harness command: {ns.harness_cmd}", ERR_USAGE, kind="usage")
