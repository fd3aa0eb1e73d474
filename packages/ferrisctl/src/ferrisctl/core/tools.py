"""External tool discovery."""

from __future__ import annotations

import shutil
from pathlib import Path

from .process import run_command


def which(name: str) -> str | None:
    return shutil.which(name)


def has_tool(name: str) -> bool:
    return which(name) is not None


def tool_version(cmd: list[str], cwd: Path) -> str:
    if which(cmd[0]) is None:
        return "missing"
    res = run_command(cmd, cwd)
    if res.code != 0:
        return "unavailable"
    text = (res.stdout or res.stderr).strip()
    return text.splitlines()[0] if text else "unknown"
