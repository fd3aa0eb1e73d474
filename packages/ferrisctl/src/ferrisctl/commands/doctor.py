from __future__ import annotations

import platform
import sys

from .. import __version__
from ..core.context import RunContext
from ..core.env import getenv
from ..core.serialize import dumps_json
from ..core.tools import tool_version
from .hooks.command import hooks_status

TOOL_PROBES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("git", ("git", "--version")),
    ("cargo", ("cargo", "--version")),
    ("rustup", ("rustup", "--version")),
    ("cargo-llvm-cov", ("cargo-llvm-cov", "llvm-cov", "--version")),
    ("cargo-tarpaulin", ("cargo-tarpaulin", "tarpaulin", "--version")),
    ("node", ("node", "--version")),
    ("npm", ("npm", "--version")),
    ("npx", ("npx", "--version")),
    ("gh", ("gh", "--version")),
)


def build_report(ctx: RunContext) -> dict[str, object]:
    root = ctx.repo_root
    tools = {name: tool_version(list(cmd), root) for name, cmd in TOOL_PROBES}
    return {
        "schema_version": 1,
        "tool": "ferrisctl",
        "status": "ok",
        "run_id": ctx.run_id,
        "ferrisctl_version": __version__,
        "repo_root": str(root),
        "evidence_root": str(ctx.evidence_root),
        "config_source": ctx.config.source,
        "python": sys.version.split()[0],
        "platform": platform.platform(),
        "tools": tools,
        "env": {
            "RUN_ID": getenv("RUN_ID", ""),
            "FERRISCTL_EVIDENCE_ROOT": getenv("FERRISCTL_EVIDENCE_ROOT", ""),
            "FERRISCTL_CONFIG": getenv("FERRISCTL_CONFIG", ""),
        },
        "checks": {
            "git_dir": (root / ".git").is_dir(),
            "cargo_workspace": (root / "Cargo.toml").is_file(),
            "package_json": (root / "package.json").is_file(),
            "node_modules": (root / "node_modules").is_dir(),
        },
        "hooks": hooks_status(ctx),
    }


def run_doctor(ctx: RunContext) -> int:
    report = build_report(ctx)
    if ctx.json_output:
        print(dumps_json(report))
        return 0
    console = ctx.console
    console.line(f"run_id={ctx.run_id}")
    console.line(f"repo_root={report['repo_root']}")
    console.line(f"python={report['python']}")
    console.line()
    for name, version in report["tools"].items():  # type: ignore[union-attr]
        if version == "missing":
            console.warning(f"{name}: missing")
        else:
            console.line(f"{name}: {version}")
    console.line()
    for name, ok in report["checks"].items():  # type: ignore[union-attr]
        console.line(f"{name}: {'ok' if ok else 'missing'}")
    for name, state in report["hooks"].items():  # type: ignore[union-attr]
        console.line(f"hook {name}: {state}")
    return 0
