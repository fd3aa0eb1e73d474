from __future__ import annotations

import argparse
import sys
from pathlib import Path

from ...core.context import RunContext
from ...core.errors import ScriptError
from ...core.exit_codes import ERR_FAILED, ERR_USAGE
from ...core.git import hooks_dir
from ...core.serialize import dumps_json
from .runner import run_pre_commit, run_pre_push
from .templates import HOOK_NAMES, HOOK_PURPOSES, backup_path, hook_state, hook_title, render_hook


def configure_hooks_parser(sub: argparse._SubParsersAction[argparse.ArgumentParser]) -> None:
    parser = sub.add_parser("hooks", help="install, remove and run the repository git hooks")
    hooks_sub = parser.add_subparsers(dest="hooks_cmd", required=True)
    hooks_sub.add_parser("install", help="install the pre-commit and pre-push hooks into .git/hooks")
    hooks_sub.add_parser("uninstall", help="remove hooks installed by ferrisctl")
    hooks_sub.add_parser("status", help="show which hooks are installed")
    run = hooks_sub.add_parser("run", help="run a hook's checks (invoked by git)")
    run.add_argument("hook", choices=HOOK_NAMES)
    run.add_argument("args", nargs=argparse.REMAINDER, help="arguments passed by git")


def require_hooks_dir(ctx: RunContext) -> Path:
    if not (ctx.repo_root / ".git").is_dir():
        raise ScriptError(
            f"Not in a git repository root; run this from the {ctx.config.project_name} root directory",
            ERR_FAILED,
            kind="not_git_root",
        )
    hooks = hooks_dir(ctx.repo_root)
    if not hooks.is_dir():
        raise ScriptError(".git/hooks directory not found", ERR_FAILED, kind="hooks_dir_missing")
    return hooks


def install_hooks(ctx: RunContext, python: str | None = None) -> int:
    console = ctx.console
    console.line(f"=== {ctx.config.project_name} Git Hooks Installer ===")
    console.line()
    hooks = require_hooks_dir(ctx)
    interpreter = python or sys.executable
    console.line("📋 Installing git hooks...")
    console.line()
    for name in HOOK_NAMES:
        dest = hooks / name
        backup = backup_path(dest)
        if hook_state(dest) == "foreign" and backup.exists():
            raise ScriptError(f"{backup.name} already exists; move it away before installing", ERR_FAILED, kind="backup_exists")
    for name in HOOK_NAMES:
        dest = hooks / name
        if hook_state(dest) == "foreign":
            backup = backup_path(dest)
            dest.replace(backup)
            console.info(f"Existing {name} hook saved as {backup.name}")
        console.line(f"Installing {name} hook...")
        dest.write_text(render_hook(name, interpreter), encoding="utf-8")
        dest.chmod(0o755)
        console.success(f"{hook_title(name)} hook installed")
        console.line()

    console.line("=== Installation Complete ===")
    console.line()
    console.line("The following hooks are now active:")
    for name in HOOK_NAMES:
        console.line(f"  • {name}: {HOOK_PURPOSES[name]}")
    console.line()
    console.line("What this means:")
    console.line("  ✅ Code quality checks run automatically before every commit")
    console.line("  ✅ Markdown linting runs automatically before every push")
    console.line("  ✅ Catches issues before CI runs")
    console.line("  ✅ Can be bypassed with: git commit/push --no-verify")
    console.line()
    console.line("To uninstall:")
    console.line("  ferrisctl hooks uninstall")
    console.line()
    return 0


def uninstall_hooks(ctx: RunContext) -> int:
    console = ctx.console
    console.line(f"=== {ctx.config.project_name} Git Hooks Uninstaller ===")
    console.line()
    hooks = require_hooks_dir(ctx)
    console.line("📋 Uninstalling git hooks...")
    console.line()
    removed = 0
    for name in HOOK_NAMES:
        dest = hooks / name
        backup = backup_path(dest)
        state = hook_state(dest)
        if state == "managed":
            dest.unlink()
            removed += 1
            console.success(f"{hook_title(name)} hook removed")
        elif state == "absent":
            console.info(f"{hook_title(name)} hook not found (already uninstalled)")
        else:
            console.warning(f"{hook_title(name)} hook is not managed by ferrisctl; left in place")
            continue
        if backup.exists():
            backup.replace(dest)
            console.info(f"Restored previous {name} hook")
    console.line()
    if removed:
        console.line(f"🎉 Successfully uninstalled {removed} hook(s)!")
        console.line()
        console.line("Note: You can reinstall hooks anytime by running:")
        console.line("  ferrisctl hooks install")
    else:
        console.info("No hooks were installed")
    return 0


def hooks_status(ctx: RunContext) -> dict[str, str]:
    hooks = hooks_dir(ctx.repo_root)
    return {name: hook_state(hooks / name) for name in HOOK_NAMES}


def run_hooks_command(ctx: RunContext, ns: argparse.Namespace) -> int:
    sub = ns.hooks_cmd
    if sub == "install":
        return install_hooks(ctx)
    if sub == "uninstall":
        return uninstall_hooks(ctx)
    if sub == "status":
        status = hooks_status(ctx)
        if ctx.json_output:
            print(dumps_json({"schema_version": 1, "tool": "ferrisctl", "status": "ok", "run_id": ctx.run_id, "hooks": status}))
        else:
            for name, state in status.items():
                ctx.console.line(f"{name}: {state}")
        return 0
    if sub == "run":
        if ns.hook == "pre-push":
            return run_pre_push(ctx)
        return run_pre_commit(ctx)
    raise ScriptError(f"unsupported hooks command: {sub}", ERR_USAGE, kind="usage")
