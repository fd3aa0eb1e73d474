from __future__ import annotations

import subprocess
import sys
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from .exit_codes import ERR_NOT_FOUND
from .logging import log_event

if TYPE_CHECKING:
    from .context import RunContext


@dataclass(frozen=True)
class CommandResult:
    code: int
    stdout: str
    stderr: str
    duration_ms: int

    @property
    def combined_output(self) -> str:
        return (self.stdout + self.stderr).strip()

    @property
    def ok(self) -> bool:
        return self.code == 0


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def run_command(
    cmd: list[str],
    cwd: Path,
    timeout_seconds: int = 0,
    env: dict[str, str] | None = None,
    ctx: RunContext | None = None,
) -> CommandResult:
    """Run `cmd` to completion with stdout and stderr captured."""
    started = time.monotonic()
    try:
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            env=env,
            encoding="utf-8",
            errors="replace",
            capture_output=True,
            check=False,
            timeout=(timeout_seconds if timeout_seconds > 0 else None),
        )
        result = CommandResult(
            code=proc.returncode,
            stdout=proc.stdout or "",
            stderr=proc.stderr or "",
            duration_ms=_elapsed_ms(started),
        )
    except FileNotFoundError:
        result = CommandResult(ERR_NOT_FOUND, "", f"command not found: {cmd[0]}", _elapsed_ms(started))
    except subprocess.TimeoutExpired as exc:
        result = CommandResult(
            code=124,
            stdout=_decode(exc.stdout),
            stderr=(_decode(exc.stderr) + f"\ncommand timed out after {timeout_seconds}s").strip(),
            duration_ms=_elapsed_ms(started),
        )
    _log_run(ctx, cmd, cwd, result, captured=True)
    return result


def stream_command(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    ctx: RunContext | None = None,
) -> CommandResult:
    """Run `cmd` with stdout and stderr inherited from this process."""
    started = time.monotonic()
    try:
        proc = subprocess.run(cmd, cwd=cwd, env=env, check=False)
        result = CommandResult(proc.returncode, "", "", _elapsed_ms(started))
    except FileNotFoundError:
        result = CommandResult(ERR_NOT_FOUND, "", f"command not found: {cmd[0]}", _elapsed_ms(started))
    _log_run(ctx, cmd, cwd, result, captured=False)
    return result


def tee_command(
    cmd: list[str],
    cwd: Path,
    env: dict[str, str] | None = None,
    ctx: RunContext | None = None,
    sink: TextIO | None = None,
) -> CommandResult:
    """Run `cmd` capturing stdout and stderr while copying every line to `sink` (stderr by default)."""
    started = time.monotonic()
    try:
        proc = subprocess.Popen(
            cmd,
            cwd=cwd,
            env=env,
            encoding="utf-8",
            errors="replace",
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
        )
    except FileNotFoundError:
        result = CommandResult(ERR_NOT_FOUND, "", f"command not found: {cmd[0]}", _elapsed_ms(started))
        _log_run(ctx, cmd, cwd, result, captured=True)
        return result
    lines: dict[str, list[str]] = {"stdout": [], "stderr": []}
    lock = threading.Lock()

    def pump(name: str, stream: TextIO) -> None:
        for line in stream:
            lines[name].append(line)
            with lock:
                out = sink if sink is not None else sys.stderr
                out.write(line)
                out.flush()
        stream.close()

    pumps = [
        threading.Thread(target=pump, args=("stdout", proc.stdout), daemon=True),
        threading.Thread(target=pump, args=("stderr", proc.stderr), daemon=True),
    ]
    for thread in pumps:
        thread.start()
    code = proc.wait()
    for thread in pumps:
        thread.join()
    result = CommandResult(code, "".join(lines["stdout"]), "".join(lines["stderr"]), _elapsed_ms(started))
    _log_run(ctx, cmd, cwd, result, captured=True)
    return result


def _decode(raw: str | bytes | None) -> str:
    if raw is None:
        return ""
    if isinstance(raw, bytes):
        return raw.decode("utf-8", errors="replace")
    return raw


def _log_run(ctx: RunContext | None, cmd: list[str], cwd: Path, result: CommandResult, *, captured: bool) -> None:
    if ctx is None or not ctx.diagnostics:
        return
    log_event(
        ctx,
        "info" if result.ok else "warn",
        "process",
        "run-command",
        command=" ".join(cmd),
        cwd=str(cwd),
        code=result.code,
        duration_ms=result.duration_ms,
        captured=captured,
    )
