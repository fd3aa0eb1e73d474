from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..contracts.ids import COMMANDS
from ..contracts.validate import validate_self


@dataclass(frozen=True)
class CommandSpec:
    name: str
    help_text: str
    touches: tuple[str, ...] = ()
    tools: tuple[str, ...] = ()
    replaces: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()


def command_registry() -> tuple[CommandSpec, ...]:
    return (
        CommandSpec("fmt", "format Rust code, or verify with --check", ("**/*.rs",), ("cargo",), ("format.ps1", "format.sh"), ("ferrisctl fmt --check",)),
        CommandSpec("lint", "cargo clippy with warnings denied", ("target/",), ("cargo",), ("lint.ps1", "lint.sh"), ("ferrisctl lint",)),
        CommandSpec("test", "cargo test over the workspace", ("target/",), ("cargo",), ("test.ps1", "test.sh"), ("ferrisctl test -- -- --nocapture",)),
        CommandSpec("bench", "compiler benchmarks with criterion", ("target/criterion/",), ("cargo",), ("bench.ps1", "bench.sh"), ("ferrisctl bench --package ferrisscript_compiler",)),
        CommandSpec("coverage", "workspace coverage reports", ("target/coverage/",), ("cargo", "cargo-llvm-cov", "cargo-tarpaulin"), ("coverage.ps1", "coverage.sh"), ("ferrisctl coverage --backend tarpaulin",)),
        CommandSpec("docs lint", "markdownlint and markdown-link-check", ("**/*.md", "node_modules/"), ("node", "npm", "npx"), ("lint-docs.ps1", "lint-docs.sh"), ("ferrisctl docs lint --fix",)),
        CommandSpec("hooks install", "install pre-commit and pre-push hooks", (".git/hooks/",), (), ("install-git-hooks.ps1", "install-git-hooks.sh"), ("ferrisctl hooks install",)),
        CommandSpec("hooks uninstall", "remove ferrisctl-managed hooks", (".git/hooks/",), (), ("uninstall-git-hooks.ps1", "uninstall-git-hooks.sh"), ("ferrisctl hooks uninstall",)),
        CommandSpec("hooks status", "show installed hook state", (".git/hooks/",), (), (), ("ferrisctl --json hooks status",)),
        CommandSpec("hooks run", "run a hook's checks", ("**/*.md", "node_modules/"), ("git", "cargo", "node", "npm", "npx"), ("pre-push.ps1", "pre-push.sh", "pre-commit.ps1", "pre-commit.sh"), ("ferrisctl hooks run pre-commit",)),
        CommandSpec("labels create", "create missing GitHub labels", (), ("gh",), ("create-labels.ps1", "create-labels.sh"), ("ferrisctl labels create --dry-run",)),
        CommandSpec("labels list", "print the label catalog", (), (), (), ("ferrisctl --json labels list",)),
        CommandSpec("harness run", "build and run the ferris-test harness", ("target/release/",), ("cargo",), ("run-tests.ps1", "run-tests.sh"), ("ferrisctl harness run --all",)),
        CommandSpec("version", "print tool version and git context", (), ("git",), (), ("ferrisctl --json version",)),
        CommandSpec("doctor", "show tooling and repository diagnostics", (), ("git", "cargo", "rustup", "node", "npm", "npx", "gh"), (), ("ferrisctl doctor",)),
        CommandSpec("commands", "print the machine-readable command surface", (), (), (), ("ferrisctl --json commands",)),
    )


def commands_payload(run_id: str = "") -> dict[str, Any]:
    payload: dict[str, Any] = {
        "schema_name": COMMANDS,
        "schema_version": 1,
        "tool": "ferrisctl",
        "status": "ok",
        "run_id": run_id,
        "commands": [
            {
                "name": c.name,
                "help": c.help_text,
                "touches": list(c.touches),
                "tools": list(c.tools),
                "replaces": list(c.replaces),
                "examples": list(c.examples),
            }
            for c in sorted(command_registry(), key=lambda c: c.name)
        ],
    }
    return validate_self(COMMANDS, payload)
