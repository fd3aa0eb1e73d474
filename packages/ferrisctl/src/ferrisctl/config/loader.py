"""Load `ferrisctl.yaml` and merge it over the built-in defaults."""

from __future__ import annotations

import copy
from pathlib import Path
from typing import Any

import yaml

from ..contracts.ids import CONFIG
from ..contracts.validate import validate
from ..core.env import getenv
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_CONFIG, ERR_VALIDATION
from ..core.paths import resolve_under
from .defaults import default_config
from .model import FerrisConfig

CONFIG_FILENAME = "ferrisctl.yaml"
CONFIG_ENV = "FERRISCTL_CONFIG"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def resolve_config_path(repo_root: Path, explicit: str | None = None) -> Path | None:
    raw = explicit or getenv(CONFIG_ENV)
    if raw:
        path = resolve_under(repo_root, raw)
        if not path.is_file():
            raise ScriptError(f"config file not found: {raw}", ERR_CONFIG, kind="config_missing")
        return path
    default = repo_root / CONFIG_FILENAME
    return default if default.is_file() else None


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ScriptError(f"{path.name}: invalid yaml ({exc})", ERR_CONFIG, kind="config_invalid") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ScriptError(f"{path.name}: top-level value must be a mapping", ERR_CONFIG, kind="config_invalid")
    return data


def load_config(repo_root: Path, explicit: str | None = None) -> FerrisConfig:
    path = resolve_config_path(repo_root, explicit)
    overrides = _read_yaml(path) if path is not None else {}
    try:
        validate(CONFIG, overrides)
    except ScriptError as exc:
        if exc.code != ERR_VALIDATION:
            raise
        raise ScriptError(f"invalid configuration: {exc}", ERR_CONFIG, kind="config_invalid") from exc
    merged = deep_merge(default_config(), overrides)
    return FerrisConfig.from_json(merged, source=(str(path) if path is not None else None))
