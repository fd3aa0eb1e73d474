from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from .clock import run_stamp
from .console import Console
from .env import env_flag, getenv
from .git import read_git_context
from .paths import evidence_root_path, resolve_repo_root

if TYPE_CHECKING:
    from ..config.model import FerrisConfig

OutputFormat = Literal["text", "json"]


@dataclass(frozen=True)
class RunContext:
    run_id: str
    repo_root: Path
    evidence_root: Path
    output_format: OutputFormat
    verbose: bool
    quiet: bool
    log_json: bool
    color: bool
    git_sha: str
    git_dirty: bool
    config: FerrisConfig
    console: Console = field(compare=False, repr=False)

    @property
    def run_dir(self) -> Path:
        return self.evidence_root / self.run_id

    @property
    def json_output(self) -> bool:
        return self.output_format == "json"

    @property
    def diagnostics(self) -> bool:
        return self.verbose or self.log_json

    @classmethod
    def from_args(
        cls,
        run_id: str | None = None,
        evidence_root: str | None = None,
        output_format: OutputFormat = "text",
        verbose: bool = False,
        quiet: bool = False,
        log_json: bool = False,
        no_color: bool = False,
        config_path: str | None = None,
        repo_root: Path | None = None,
    ) -> "RunContext":
        from ..config.loader import load_config

        root = repo_root.resolve() if repo_root is not None else resolve_repo_root()
        git_ctx = read_git_context(root)
        default_run = f"ferris-{run_stamp()}-{git_ctx.sha}"
        resolved_run_id = run_id or getenv("RUN_ID") or default_run
        resolved_evidence_root = evidence_root_path(root, evidence_root or getenv("FERRISCTL_EVIDENCE_ROOT"))
        color = not (no_color or env_flag("NO_COLOR"))
        json_mode = output_format == "json"
        return cls(
            run_id=resolved_run_id,
            repo_root=root,
            evidence_root=resolved_evidence_root,
            output_format=output_format,
            verbose=verbose,
            quiet=quiet,
            log_json=log_json,
            color=color,
            git_sha=git_ctx.sha,
            git_dirty=git_ctx.is_dirty,
            config=load_config(root, config_path),
            # JSON mode keeps stdout for the payload.
            console=Console(quiet=quiet, color=color, to_stderr=json_mode),
        )
