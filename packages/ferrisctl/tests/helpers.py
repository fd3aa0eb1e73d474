from __future__ import annotations

import json
import os
import shutil
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[3]
SRC = ROOT / "packages/ferrisctl/src"
REAL_PATH = os.environ.get("PATH", "")
# Utilities the fake scripts themselves rely on.
_PASSTHROUGH = ("cat", "grep")


class FakeBin:
    """A directory of shell scripts standing in for cargo, gh, node and friends.

    Every script appends `<name> <args>` to a shared call log before running its body.
    """

    def __init__(self, root: Path) -> None:
        self.root = root
        self.dir = root / "bin"
        self.log = root / "calls.log"
        self.dir.mkdir(parents=True, exist_ok=True)
        self.log.touch()
        for name in _PASSTHROUGH:
            real = shutil.which(name, path=REAL_PATH)
            if real is not None:
                (self.dir / name).symlink_to(real)

    def add(self, name: str, body: str = "exit 0") -> Path:
        script = self.dir / name
        script.write_text(
            f"#!/bin/sh\nprintf '%s\\n' \"{name} $*\" >> \"{self.log}\"\n{body}\n",
            encoding="utf-8",
        )
        script.chmod(0o755)
        return script

    def remove(self, name: str) -> None:
        (self.dir / name).unlink(missing_ok=True)

    def install_git(self) -> None:
        diff = self.root / "git-diff.txt"
        self.add(
            "git",
            "case \"$1\" in\n"
            "  rev-parse) echo abc1234 ;;\n"
            "  status) : ;;\n"
            f"  diff) if [ -f \"{diff}\" ]; then cat \"{diff}\"; else echo 'no upstream' >&2; exit 128; fi ;;\n"
            "esac\n"
            "exit 0",
        )

    def set_changed_files(self, *paths: str) -> None:
        (self.root / "git-diff.txt").write_text("".join(f"{p}\n" for p in paths), encoding="utf-8")

    def calls(self, name: str | None = None) -> list[str]:
        lines = [line for line in self.log.read_text(encoding="utf-8").splitlines() if line]
        if name is None:
            return lines
        return [line for line in lines if line.split(" ", 1)[0] == name]


def read_report(repo: Path, lane: str, run_id: str = "pytest-run") -> dict[str, object]:
    path = repo / "target/ferrisctl/evidence" / run_id / f"{lane}.report.json"
    return json.loads(path.read_text(encoding="utf-8"))


def run_ferrisctl(*args: str, cwd: Path, path: str | None = None) -> subprocess.CompletedProcess[str]:
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC)
    env.setdefault("RUN_ID", "pytest-run")
    if path is not None:
        env["PATH"] = path
    return subprocess.run(
        [sys.executable, "-m", "ferrisctl.cli", *args],
        cwd=cwd,
        env=env,
        text=True,
        capture_output=True,
        check=False,
    )
