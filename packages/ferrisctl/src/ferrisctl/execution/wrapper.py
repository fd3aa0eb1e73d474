"""The shared wrapper contract: banner, fail-fast steps, report, exit code."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from ..core.context import RunContext
from ..core.logging import log_event
from ..core.serialize import dumps_json
from .report import build_lane_report, write_lane_report
from .steps import Step, StepRunner


def explain_steps(ctx: RunContext, lane: str, steps: Sequence[Step]) -> int:
    planned = [step.command for step in steps]
    if ctx.json_output:
        payload = {
            "schema_version": 1,
            "tool": "ferrisctl",
            "status": "ok",
            "kind": "explain",
            "lane": lane,
            "run_id": ctx.run_id,
            "planned_steps": planned,
        }
        print(dumps_json(payload))
        return 0
    ctx.console.line(f"plan: {lane}")
    for idx, cmd in enumerate(planned, start=1):
        ctx.console.line(f"{idx}. {cmd}")
    return 0


def finish_lane(
    ctx: RunContext,
    lane: str,
    runner: StepRunner,
    *,
    exit_code: int,
    success: str,
    failure: str,
    notes: tuple[str, ...] = (),
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
    extra: dict[str, Any] | None = None,
) -> None:
    ok = exit_code == 0
    failed = runner.first_failure
    all_errors = list(errors or [])
    if failed is not None:
        all_errors.append(f"{failed.command} exited with {failed.exit_code}")
    payload = build_lane_report(
        ctx,
        lane,
        ok=ok,
        exit_code=exit_code,
        steps=runner.to_json(),
        errors=all_errors,
        warnings=warnings,
        extra=extra,
    )
    try:
        path = write_lane_report(ctx, lane, payload)
    except OSError as exc:
        ctx.console.warning(f"could not write {lane} report: {exc}")
    else:
        if ctx.diagnostics:
            log_event(ctx, "info", "report", "write", lane=lane, path=str(path))
    if ok:
        ctx.console.closing_banner(success, ok=True, notes=notes)
    else:
        ctx.console.closing_banner(failure, ok=False)
    if ctx.json_output:
        print(dumps_json(payload))


def run_steps(
    ctx: RunContext,
    lane: str,
    title: str,
    steps: Sequence[Step],
    *,
    success: str,
    notes: tuple[str, ...] = (),
    runner: StepRunner | None = None,
) -> int:
    """Run `steps` fail-fast and return 0 or the first failing exit code."""
    runner = runner or StepRunner(ctx)
    ctx.console.banner(title)
    for step in steps:
        ctx.console.line(f"{step.label}...")
        outcome = runner.run(step)
        if not outcome.ok:
            if step.hint:
                ctx.console.line(step.hint)
            break
    code = runner.exit_code
    failed = runner.first_failure
    failure = f"{lane} failed: {failed.command} exited with {failed.exit_code}" if failed is not None else f"{lane} failed"
    finish_lane(ctx, lane, runner, exit_code=code, success=success, failure=failure, notes=notes)
    return code
