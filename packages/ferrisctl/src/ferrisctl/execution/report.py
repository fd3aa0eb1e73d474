from __future__ import annotations

from pathlib import Path
from typing import Any

from ..contracts.output import build_output_base
from ..core.context import RunContext
from ..core.serialize import dumps_json


def report_path(ctx: RunContext, lane: str) -> Path:
    return ctx.run_dir / f"{lane}.report.json"


def build_lane_report(
    ctx: RunContext,
    lane: str,
    *,
    ok: bool,
    exit_code: int,
    steps: list[dict[str, Any]],
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    meta: dict[str, Any] = {
        "lane": lane,
        "exit_code": exit_code,
        "steps": steps,
        "repo_root": str(ctx.repo_root),
        "git_sha": ctx.git_sha,
        "git_dirty": ctx.git_dirty,
    }
    meta.update(extra or {})
    return build_output_base(run_id=ctx.run_id, ok=ok, errors=errors, warnings=warnings, meta=meta)


def write_lane_report(ctx: RunContext, lane: str, payload: dict[str, Any]) -> Path:
    out_path = report_path(ctx, lane)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(dumps_json(payload, pretty=True) + "\n", encoding="utf-8")
    return out_path
