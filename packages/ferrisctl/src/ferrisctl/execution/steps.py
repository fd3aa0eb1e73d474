from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from ..core.context import RunContext
from ..core.exit_codes import ERR_NOT_FOUND
from ..core.process import stream_command, tee_command

OUTPUT_TAIL_CHARS = 8000


@dataclass(frozen=True)
class Step:
    label: str
    cmd: tuple[str, ...]
    hint: str = ""

    @property
    def command(self) -> str:
        return " ".join(self.cmd)


@dataclass(frozen=True)
class StepOutcome:
    label: str
    command: str
    exit_code: int
    duration_ms: int
    stdout: str = ""
    stderr: str = ""
    captured: bool = False

    @property
    def ok(self) -> bool:
        return self.exit_code == 0

    def to_json(self) -> dict[str, Any]:
        row: dict[str, Any] = {
            "label": self.label,
            "command": self.command,
            "exit_code": self.exit_code,
            "duration_ms": self.duration_ms,
        }
        if self.captured:
            row["stdout"] = self.stdout[-OUTPUT_TAIL_CHARS:]
            row["stderr"] = self.stderr[-OUTPUT_TAIL_CHARS:]
        return row


class StepRunner:
    """Runs steps in the repository root and remembers every outcome.

    In text mode tool output is inherited by the terminal. In JSON mode it is
    recorded for the report and copied to stderr as it arrives, so stdout only
    carries the JSON payload.
    """

    def __init__(self, ctx: RunContext, *, capture: bool | None = None, cwd: Path | None = None) -> None:
        self.ctx = ctx
        self.capture = ctx.json_output if capture is None else capture
        self.cwd = cwd or ctx.repo_root
        self.outcomes: list[StepOutcome] = []

    def run(self, step: Step, *, capture: bool | None = None) -> StepOutcome:
        captured = self.capture if capture is None else capture
        if captured:
            res = tee_command(list(step.cmd), self.cwd, ctx=self.ctx)
        else:
            res = stream_command(list(step.cmd), self.cwd, ctx=self.ctx)
        if res.code == ERR_NOT_FOUND and res.stderr == f"command not found: {step.cmd[0]}":
            self.ctx.console.error(res.stderr)
        outcome = StepOutcome(
            label=step.label,
            command=step.command,
            exit_code=res.code,
            duration_ms=res.duration_ms,
            stdout=res.stdout,
            stderr=res.stderr,
            captured=captured,
        )
        self.outcomes.append(outcome)
        return outcome

    @property
    def first_failure(self) -> StepOutcome | None:
        for outcome in self.outcomes:
            if not outcome.ok:
                return outcome
        return None

    @property
    def exit_code(self) -> int:
        failed = self.first_failure
        return failed.exit_code if failed is not None else 0

    def to_json(self) -> list[dict[str, Any]]:
        return [outcome.to_json() for outcome in self.outcomes]
