from __future__ import annotations

import io
import sys
from pathlib import Path

from ferrisctl.core.exit_codes import ERR_NOT_FOUND
from ferrisctl.core.git import changed_files_since_upstream, read_git_context
from ferrisctl.core.process import run_command, stream_command, tee_command
from ferrisctl.core.tools import tool_version


def test_run_command_captures_output_and_duration(tmp_path: Path) -> None:
    res = run_command([sys.executable, "-c", "print('ok')"], tmp_path)
    assert res.code == 0
    assert res.ok
    assert res.stdout.strip() == "ok"
    assert res.duration_ms >= 0


def test_run_command_mirrors_exit_code(tmp_path: Path) -> None:
    res = run_command([sys.executable, "-c", "import sys; sys.stderr.write('bad'); sys.exit(7)"], tmp_path)
    assert res.code == 7
    assert res.combined_output == "bad"


def test_missing_executable_is_127_not_an_exception(tmp_path: Path) -> None:
    res = run_command(["ferrisctl-definitely-missing-tool"], tmp_path)
    assert res.code == ERR_NOT_FOUND
    assert "command not found" in res.stderr
    streamed = stream_command(["ferrisctl-definitely-missing-tool"], tmp_path)
    assert streamed.code == ERR_NOT_FOUND


def test_run_command_timeout_returns_124(tmp_path: Path) -> None:
    res = run_command([sys.executable, "-c", "import time; time.sleep(5)"], tmp_path, timeout_seconds=1)
    assert res.code == 124
    assert "timed out" in res.stderr


def test_git_context_from_fake_git(repo: Path) -> None:
    ctx = read_git_context(repo)
    assert ctx.sha == "abc1234"
    assert ctx.is_dirty is False


def test_changed_files_without_upstream_is_empty(repo: Path) -> None:
    assert changed_files_since_upstream(repo) == []


def test_changed_files_since_upstream(repo: Path, fake_bin) -> None:
    fake_bin.set_changed_files("README.md", "crates/compiler/src/lib.rs")
    assert changed_files_since_upstream(repo) == ["README.md", "crates/compiler/src/lib.rs"]
    assert "git diff --name-only @{u}.." in fake_bin.calls("git")


def test_tool_version_reports_missing_and_first_line(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo", "echo 'cargo 1.80.0 (abc 2024-07-01)'\necho extra")
    assert tool_version(["cargo", "--version"], repo) == "cargo 1.80.0 (abc 2024-07-01)"
    assert tool_version(["rustup", "--version"], repo) == "missing"
    fake_bin.add("gh", "exit 3")
    assert tool_version(["gh", "--version"], repo) == "unavailable"


def test_tee_command_records_and_copies_both_streams(tmp_path: Path) -> None:
    sink = io.StringIO()
    code = "import sys; print('compiling'); sys.stderr.write('error: boom\\n'); sys.exit(101)"
    res = tee_command([sys.executable, "-c", code], tmp_path, sink=sink)
    assert res.code == 101
    assert res.stdout == "compiling\n"
    assert res.stderr == "error: boom\n"
    assert "compiling" in sink.getvalue()
    assert "error: boom" in sink.getvalue()
    missing = tee_command(["ferrisctl-definitely-missing-tool"], tmp_path, sink=sink)
    assert missing.code == ERR_NOT_FOUND
