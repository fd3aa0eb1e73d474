from __future__ import annotations

import argparse

from ...core.context import RunContext
from ...core.errors import ScriptError
from ...core.exit_codes import ERR_USAGE
from ...execution.wrapper import explain_steps, run_steps
from .coverage import run_coverage
from .plan import COVERAGE_BACKENDS, bench_steps, declares_criterion, fmt_steps, lint_steps, test_steps

CARGO_COMMANDS = ("fmt", "lint", "test", "bench", "coverage")


def _add_explain(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--explain", action="store_true", help="print planned steps without executing")


def configure_cargo_parsers(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    fmt = sub.add_parser("fmt", help="format all Rust code with cargo fmt")
    fmt.add_argument("--check", action="store_true", help="verify formatting without modifying files")
    _add_explain(fmt)

    lint = sub.add_parser("lint", help="run cargo clippy with warnings denied")
    _add_explain(lint)

    test = sub.add_parser("test", help="run all workspace tests with cargo test")
    _add_explain(test)
    test.add_argument("args", nargs=argparse.REMAINDER, help="extra arguments for cargo test (after `--`)")

    bench = sub.add_parser("bench", help="run compiler benchmarks with cargo bench")
    bench.add_argument("--package", help="cargo package to benchmark")
    _add_explain(bench)

    coverage = sub.add_parser("coverage", help="collect workspace coverage (HTML and LCOV reports)")
    coverage.add_argument("--backend", choices=COVERAGE_BACKENDS, help="coverage tool to drive")
    coverage.add_argument("--output-dir", help="report directory (default target/coverage)")
    coverage.add_argument("--no-install", action="store_true", help="fail instead of installing a missing coverage tool")
    _add_explain(coverage)


def _remainder(ns: argparse.Namespace) -> list[str]:
    args = list(getattr(ns, "args", []) or [])
    if args and args[0] == "--":
        args = args[1:]
    return args


def run_cargo_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    project = ctx.config.project_name
    if ns.cmd == "fmt":
        steps = fmt_steps(check=ns.check)
        if ns.explain:
            return explain_steps(ctx, "fmt", steps)
        if ns.check:
            return run_steps(ctx, "fmt", f"{project} Format Check", steps, success="Code formatting is clean!")
        return run_steps(
            ctx,
            "fmt",
            f"{project} Code Formatter",
            steps,
            success="Code formatted successfully!",
            notes=("Tip: Run 'ferrisctl fmt --check' to verify without modifying files",),
        )
    if ns.cmd == "lint":
        steps = lint_steps()
        if ns.explain:
            return explain_steps(ctx, "lint", steps)
        return run_steps(ctx, "lint", f"{project} Linting (Clippy)", steps, success="All linting checks passed!")
    if ns.cmd == "test":
        steps = test_steps(_remainder(ns))
        if ns.explain:
            return explain_steps(ctx, "test", steps)
        return run_steps(ctx, "test", f"{project} Test Suite", steps, success="All tests passed!")
    if ns.cmd == "bench":
        steps = bench_steps(ns.package or ctx.config.bench_package)
        if ns.explain:
            return explain_steps(ctx, "bench", steps)
        if not declares_criterion(ctx.repo_root):
            ctx.console.warning("Note: Benchmarks require 'criterion' in Cargo.toml")
        return run_steps(
            ctx,
            "bench",
            f"{project} Benchmark Suite",
            steps,
            success="Benchmarks complete!",
            notes=("Results saved to: target/criterion/",),
        )
    if ns.cmd == "coverage":
        return run_coverage(ctx, ns)
    raise ScriptError(f"unsupported cargo command: {ns.cmd}", ERR_USAGE, kind="usage")
