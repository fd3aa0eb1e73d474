"""CLI payload output helpers."""

from __future__ import annotations

from ..contracts.ids import ERROR
from ..contracts.validate import validate_self
from ..core.serialize import dumps_json


def emit(payload: dict[str, object], as_json: bool) -> None:
    print(dumps_json(payload, pretty=not as_json))


def build_base_payload(ctx, status: str = "ok") -> dict[str, object]:
    return {
        "schema_version": 1,
        "tool": "ferrisctl",
        "status": status,
        "run_id": ctx.run_id,
        "repo_root": str(ctx.repo_root),
        "run_dir": str(ctx.run_dir),
        "evidence_root": str(ctx.evidence_root),
        "format": ctx.output_format,
        "git_sha": ctx.git_sha,
        "git_dirty": ctx.git_dirty,
    }


def resolve_output_format(*, cli_json: bool, cli_format: str | None, ci_present: bool) -> str:
    if cli_json:
        return "json"
    if cli_format:
        return cli_format
    return "json" if ci_present else "text"


def render_error(*, as_json: bool, message: str, code: int, kind: str = "generic_error", run_id: str | None = None) -> str:
    if as_json:
        payload: dict[str, object] = {
            "schema_name": ERROR,
            "schema_version": 1,
            "tool": "ferrisctl",
            "status": "error",
            "errors": [{"code": code, "message": message, "kind": kind}],
        }
        if run_id:
            payload["run_id"] = run_id
        return dumps_json(validate_self(ERROR, payload), pretty=False)
    return message
