from __future__ import annotations

import json
from pathlib import Path

import pytest

from ferrisctl.cli.main import main
from ferrisctl.contracts.ids import OUTPUT
from ferrisctl.contracts.validate import validate
from helpers import read_report


def test_fmt_formats_workspace_and_writes_report(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo")
    assert main(["fmt"]) == 0
    assert fake_bin.calls("cargo") == ["cargo fmt --all"]
    report = read_report(repo, "fmt")
    validate(OUTPUT, report)
    assert report["ok"] is True
    assert report["meta"]["lane"] == "fmt"
    assert [step["command"] for step in report["meta"]["steps"]] == ["cargo fmt --all"]


def test_fmt_check_failure_is_mirrored(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    fake_bin.add("cargo", "exit 1")
    assert main(["fmt", "--check"]) == 1
    assert fake_bin.calls("cargo") == ["cargo fmt --all -- --check"]
    assert "ferrisctl fmt" in capsys.readouterr().out
    report = read_report(repo, "fmt")
    assert report["ok"] is False
    assert report["errors"] == ["cargo fmt --all -- --check exited with 1"]


@pytest.mark.parametrize("code", [0, 2, 101])
def test_lint_exit_code_mirrors_clippy(repo: Path, fake_bin, code: int) -> None:
    fake_bin.add("cargo", f"exit {code}")
    assert main(["lint"]) == code
    assert fake_bin.calls("cargo") == ["cargo clippy --workspace --all-targets --all-features -- -D warnings"]


def test_test_forwards_extra_arguments(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo")
    assert main(["test", "--", "--release", "lexer"]) == 0
    assert fake_bin.calls("cargo") == ["cargo test --workspace --release lexer"]


def test_libtest_flags_reach_the_test_binary(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo")
    assert main(["test", "--", "--", "--nocapture"]) == 0
    assert fake_bin.calls("cargo") == ["cargo test --workspace -- --nocapture"]


def test_bench_uses_configured_package_and_warns_without_criterion(
    repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]
) -> None:
    fake_bin.add("cargo")
    assert main(["bench"]) == 0
    assert fake_bin.calls("cargo") == ["cargo bench --package ferrisscript_compiler"]
    assert "criterion" in capsys.readouterr().out


def test_bench_package_flag(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo")
    (repo / "Cargo.toml").write_text('[workspace.dependencies]\ncriterion = "0.5"\n', encoding="utf-8")
    assert main(["bench", "--package", "ferrisscript_runtime"]) == 0
    assert fake_bin.calls("cargo") == ["cargo bench --package ferrisscript_runtime"]


def test_explain_prints_plan_without_running(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    fake_bin.add("cargo")
    assert main(["--json", "lint", "--explain"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["kind"] == "explain"
    assert payload["planned_steps"] == ["cargo clippy --workspace --all-targets --all-features -- -D warnings"]
    assert fake_bin.calls("cargo") == []


def test_json_mode_captures_step_output(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    fake_bin.add("cargo", "echo 'warning: unused variable'\nexit 101")
    assert main(["--json", "test"]) == 101
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    validate(OUTPUT, payload)
    step = payload["meta"]["steps"][0]
    assert step["exit_code"] == 101
    assert "unused variable" in step["stdout"]
    assert "Test Suite" in captured.err


def test_missing_cargo_is_127(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["fmt"]) == 127
    assert "command not found: cargo" in capsys.readouterr().err


def test_ci_mode_still_shows_cargo_output_on_stderr(
    repo: Path, fake_bin, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setenv("CI", "true")
    fake_bin.add("cargo", "echo 'running 3 tests'\necho 'error[E0425]: cannot find value `x` in this scope' >&2\nexit 101")
    assert main(["test"]) == 101
    captured = capsys.readouterr()
    assert "error[E0425]: cannot find value `x`" in captured.err
    assert "running 3 tests" in captured.err
    payload = json.loads(captured.out)
    step = payload["meta"]["steps"][0]
    assert "error[E0425]" in step["stderr"]
    assert "running 3 tests" in step["stdout"]


def test_missing_cargo_in_json_mode_is_reported_on_stderr(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--json", "fmt"]) == 127
    captured = capsys.readouterr()
    assert "command not found: cargo" in captured.err
    assert json.loads(captured.out)["meta"]["exit_code"] == 127


def test_cwd_option_selects_repository(repo: Path, fake_bin, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    fake_bin.add("cargo")
    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)
    assert main(["--cwd", str(repo), "fmt"]) == 0
    assert read_report(repo, "fmt")["meta"]["repo_root"] == str(repo.resolve())


def test_evidence_root_and_run_id_options(repo: Path, fake_bin, tmp_path: Path) -> None:
    fake_bin.add("cargo")
    out = tmp_path / "evidence"
    assert main(["--run-id", "local-1", "--evidence-root", str(out), "lint"]) == 0
    assert (out / "local-1" / "lint.report.json").is_file()
