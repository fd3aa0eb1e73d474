from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

from .. import __version__
from ..core.context import RunContext
from ..core.env import env_flag
from ..core.errors import ScriptError
from ..core.exit_codes import ERR_INTERNAL, ERR_INTERRUPTED, ERR_USAGE
from ..core.git import read_git_context
from ..core.logging import log_event
from ..core.paths import resolve_repo_root, try_find_repo_root
from .constants import CONFIGURE_HOOKS, RUN_HOOKS
from .output import build_base_payload, emit, render_error, resolve_output_format
from .surface_registry import commands_payload


def _import_attr(module_name: str, attr: str):
    return getattr(importlib.import_module(module_name), attr)


def _version_string() -> str:
    base = f"ferrisctl {__version__}"
    repo_root = try_find_repo_root()
    if repo_root is None:
        return f"{base}+unknown"
    return f"{base}+{read_git_context(repo_root).sha}"


class _VersionAction(argparse.Action):
    """`--version` that reads git context only when the flag is used."""

    def __init__(self, option_strings: list[str], dest: str = argparse.SUPPRESS, help: str | None = None) -> None:
        super().__init__(option_strings=option_strings, dest=dest, default=argparse.SUPPRESS, nargs=0, help=help)

    def __call__(self, parser, namespace, values, option_string=None) -> None:
        print(_version_string())
        parser.exit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ferrisctl", description="FerrisScript development workflow commands")
    p.add_argument("--version", action=_VersionAction, help="show version and git sha, then exit")
    p.add_argument("--json", action="store_true", help="emit JSON output")
    p.add_argument("--format", choices=["text", "json"], default=None, help="output format")
    p.add_argument("--run-id", help="run identifier for reports")
    p.add_argument("--evidence-root", help="report root path")
    p.add_argument("--config", help="path to ferrisctl.yaml")
    p.add_argument("--cwd", help="run command from an explicit repository root")
    vg = p.add_mutually_exclusive_group()
    vg.add_argument("--verbose", action="store_true", help="enable verbose diagnostics")
    vg.add_argument("--quiet", action="store_true", help="only emit errors")
    p.add_argument("--log-json", action="store_true", help="emit diagnostics as JSON lines on stderr")
    p.add_argument("--no-color", action="store_true", help="disable colored output")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("version", help="print versions and git context")
    sub.add_parser("doctor", help="show tooling and repository diagnostics")
    sub.add_parser("commands", help="print machine-readable command surface")
    for module_name, attr in CONFIGURE_HOOKS:
        _import_attr(module_name, attr)(sub)
    return p


def _dispatch(ctx: RunContext, ns: argparse.Namespace) -> int:
    as_json = ctx.json_output
    if ns.cmd == "version":
        if as_json:
            emit({**build_base_payload(ctx), "ferrisctl_version": __version__, "python": sys.version.split()[0]}, True)
        else:
            print(f"ferrisctl {__version__}+{ctx.git_sha}")
        return 0
    if ns.cmd == "commands":
        payload = commands_payload(ctx.run_id)
        if as_json:
            emit(payload, True)
        else:
            for row in payload["commands"]:
                print(f"{row['name']:<16} {row['help']}")
        return 0
    if ns.cmd == "doctor":
        return _import_attr("ferrisctl.commands.doctor", "run_doctor")(ctx)
    if ns.cmd in RUN_HOOKS:
        return _import_attr(*RUN_HOOKS[ns.cmd])(ctx, ns)
    raise ScriptError(f"unknown command: {ns.cmd}", ERR_USAGE, kind="usage")


def main(argv: list[str] | None = None) -> int:
    p = build_parser()
    ns = p.parse_args(argv)
    if ns.format and ns.json and ns.format != "json":
        print(render_error(as_json=False, message="conflicting output flags: use either --format json or --json", code=ERR_USAGE), file=sys.stderr)
        return ERR_USAGE
    fmt = resolve_output_format(cli_json=ns.json, cli_format=ns.format, ci_present=env_flag("CI"))
    ctx: RunContext | None = None
    try:
        ctx = RunContext.from_args(
            run_id=ns.run_id,
            evidence_root=ns.evidence_root,
            output_format=fmt,
            verbose=ns.verbose,
            quiet=ns.quiet,
            log_json=ns.log_json,
            no_color=ns.no_color,
            config_path=ns.config,
            repo_root=(resolve_repo_root(Path(ns.cwd)) if ns.cwd else None),
        )
        if ctx.diagnostics:
            log_event(ctx, "info", "cli", "start", cmd=ns.cmd, fmt=ctx.output_format, config=ctx.config.source)
        return _dispatch(ctx, ns)
    except ScriptError as exc:
        if ctx is not None and ctx.diagnostics:
            log_event(ctx, "error", "cli", "error", cmd=ns.cmd, code=exc.code, kind=exc.kind)
        rendered = render_error(
            as_json=(fmt == "json"),
            message=str(exc),
            code=exc.code,
            kind=exc.kind,
            run_id=(ctx.run_id if ctx is not None else None),
        )
        print(rendered, file=sys.stderr)
        return exc.code
    except KeyboardInterrupt:
        print(render_error(as_json=(fmt == "json"), message="interrupted", code=ERR_INTERRUPTED, kind="interrupted"), file=sys.stderr)
        return ERR_INTERRUPTED
    except Exception as exc:  # pragma: no cover
        print(
            render_error(as_json=(fmt == "json"), message=f"internal error: {exc}", code=ERR_INTERNAL, kind="internal"),
            file=sys.stderr,
        )
        return ERR_INTERNAL


if __name__ == "__main__":
    raise SystemExit(main())
