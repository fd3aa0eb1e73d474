from __future__ import annotations

import json
from pathlib import Path

ERROR_REGISTRY = Path(__file__).resolve().parent / "error_registry.json"


def _load_registry() -> dict[str, int]:
    payload = json.loads(ERROR_REGISTRY.read_text(encoding="utf-8"))
    mapping: dict[str, int] = {}
    for row in payload.get("codes", []):
        mapping[str(row["name"])] = int(row["code"])
    return mapping


_REG = _load_registry()

OK = _REG["FERRIS_OK"]
ERR_FAILED = _REG["FERRIS_ERR_FAILED"]
ERR_USAGE = _REG["FERRIS_ERR_USAGE"]
ERR_CONFIG = _REG["FERRIS_ERR_CONFIG"]
ERR_VALIDATION = _REG["FERRIS_ERR_VALIDATION"]
ERR_INTERNAL = _REG["FERRIS_ERR_INTERNAL"]
ERR_NOT_FOUND = _REG["FERRIS_ERR_NOT_FOUND"]
ERR_INTERRUPTED = _REG["FERRIS_ERR_INTERRUPTED"]
