from __future__ import annotations

from typing import Any

from .ids import OUTPUT
from .validate import validate_self


def build_output_base(
    *,
    run_id: str,
    ok: bool,
    errors: list[str] | None = None,
    warnings: list[str] | None = None,
    meta: dict[str, Any] | None = None,
) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_name": OUTPUT,
        "schema_version": 1,
        "tool": "ferrisctl",
        "status": "ok" if ok else "error",
        "ok": ok,
        "errors": list(errors or []),
        "warnings": list(warnings or []),
        "meta": meta or {},
        "run_id": run_id,
    }
    return validate_self(OUTPUT, payload)
