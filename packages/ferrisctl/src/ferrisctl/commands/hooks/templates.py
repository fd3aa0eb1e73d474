from __future__ import annotations

import shlex
from pathlib import Path

MANAGED_MARKER = "ferrisctl-managed-hook"
BACKUP_SUFFIX = ".ferrisctl-backup"
HOOK_NAMES: tuple[str, ...] = ("pre-commit", "pre-push")
HOOK_PURPOSES = {
    "pre-commit": "Validates code format, linting, and tests before commit",
    "pre-push": "Validates documentation before pushing",
}


def render_hook(name: str, python: str) -> str:
    return (
        "#!/bin/sh\n"
        f"# {MANAGED_MARKER}: installed by `ferrisctl hooks install`, removed by `ferrisctl hooks uninstall`.\n"
        f"# Bypass with: git {'commit' if name == 'pre-commit' else 'push'} --no-verify\n"
        f"exec {shlex.quote(python)} -m ferrisctl.cli hooks run {name} \"$@\"\n"
    )


def backup_path(hook: Path) -> Path:
    return hook.with_name(hook.name + BACKUP_SUFFIX)


def hook_state(hook: Path) -> str:
    if not hook.exists():
        return "absent"
    try:
        text = hook.read_text(encoding="utf-8", errors="replace")
    except OSError:
        return "foreign"
    return "managed" if MANAGED_MARKER in text else "foreign"


def hook_title(name: str) -> str:
    return name[:1].upper() + name[1:]
