from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path

from ...core.context import RunContext
from ...core.exit_codes import ERR_NOT_FOUND
from ...core.process import run_command

DEAD_LINK_MARKER = "[✖]"


@dataclass(frozen=True)
class LinkCheckResult:
    path: str
    exit_code: int
    dead_links: tuple[str, ...]

    @property
    def ok(self) -> bool:
        return not self.dead_links and self.exit_code != ERR_NOT_FOUND

    def to_json(self) -> dict[str, object]:
        return {"path": self.path, "exit_code": self.exit_code, "dead_links": list(self.dead_links)}


def dead_links(output: str) -> list[str]:
    return [line.strip() for line in output.splitlines() if DEAD_LINK_MARKER in line]


def markdown_files(repo_root: Path, ignore_dirs: Iterable[str]) -> list[str]:
    ignored = set(ignore_dirs)
    files: list[str] = []
    for path in repo_root.rglob("*.md"):
        rel = path.relative_to(repo_root)
        if ignored.intersection(rel.parts[:-1]) or not path.is_file():
            continue
        files.append(rel.as_posix())
    return sorted(files)


def link_check_command(rel_path: str, config: str | None) -> list[str]:
    cmd = ["npx", "markdown-link-check", rel_path]
    if config:
        cmd.extend(["--config", config])
    return cmd


def check_file(ctx: RunContext, rel_path: str, config: str | None) -> LinkCheckResult:
    res = run_command(link_check_command(rel_path, config), ctx.repo_root, ctx=ctx)
    return LinkCheckResult(path=rel_path, exit_code=res.code, dead_links=tuple(dead_links(res.stdout + "\n" + res.stderr)))


def run_link_checks(ctx: RunContext, files: Sequence[str], config: str | None, jobs: int = 1) -> list[LinkCheckResult]:
    """Check every file; results keep the order of `files`."""
    if jobs <= 1:
        return [check_file(ctx, rel, config) for rel in files]
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(lambda rel: check_file(ctx, rel, config), files))
