"""Repository root and evidence path helpers.

`Path.cwd()` is only allowed in this module.
"""

from __future__ import annotations

from pathlib import Path

DEFAULT_EVIDENCE_ROOT = "target/ferrisctl/evidence"


def find_repo_root(start: Path | None = None) -> Path:
    cur = (start or Path.cwd()).resolve()
    if cur.is_file():
        cur = cur.parent
    while True:
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            raise RuntimeError("unable to resolve repository root")
        cur = cur.parent


def try_find_repo_root(start: Path | None = None) -> Path | None:
    try:
        return find_repo_root(start)
    except RuntimeError:
        return None


def resolve_repo_root(start: Path | None = None) -> Path:
    """Nearest ancestor holding `.git`, or the start directory itself."""
    found = try_find_repo_root(start)
    if found is not None:
        return found
    return (start or Path.cwd()).resolve()


def resolve_under(repo_root: Path, value: str | Path) -> Path:
    path = Path(value)
    return path.resolve() if path.is_absolute() else (repo_root / path).resolve()


def evidence_root_path(repo_root: Path, value: str | None) -> Path:
    return resolve_under(repo_root, value or DEFAULT_EVIDENCE_ROOT)


def display_path(repo_root: Path, path: Path) -> str:
    try:
        return path.resolve().relative_to(repo_root.resolve()).as_posix()
    except ValueError:
        return str(path)
