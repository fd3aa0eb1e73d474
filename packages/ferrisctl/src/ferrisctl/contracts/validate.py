from __future__ import annotations

import json
import re
from functools import lru_cache
from pathlib import Path
from typing import Any

import jsonschema

from ..core.errors import ScriptError
from ..core.exit_codes import ERR_VALIDATION
from .schemas import schemas_root

_SCHEMA_ID_RE = re.compile(r"^ferrisctl\.[a-z0-9][a-z0-9._-]*\.v[1-9][0-9]*$")


def schema_path(schema_name: str) -> Path:
    if not _SCHEMA_ID_RE.match(schema_name):
        raise ScriptError(f"invalid schema id: {schema_name}", ERR_VALIDATION)
    path = schemas_root() / f"{schema_name}.schema.json"
    if not path.is_file():
        raise ScriptError(f"unknown schema: {schema_name}", ERR_VALIDATION)
    return path


@lru_cache(maxsize=None)
def load_schema(schema_name: str) -> dict[str, Any]:
    return json.loads(schema_path(schema_name).read_text(encoding="utf-8"))


def validate(schema_name: str, payload: Any) -> None:
    schema = load_schema(schema_name)
    try:
        jsonschema.validate(payload, schema)
    except jsonschema.ValidationError as exc:
        pointer = "/".join(str(p) for p in exc.absolute_path)
        loc = pointer or "<root>"
        raise ScriptError(f"schema validation failed for {schema_name} at {loc}: {exc.message}", ERR_VALIDATION) from exc


def validate_self(schema_name: str, payload: dict[str, Any]) -> dict[str, Any]:
    validate(schema_name, payload)
    return payload
