from __future__ import annotations

from pathlib import Path

import pytest

from ferrisctl.cli.main import main
from ferrisctl.commands.harness.command import harness_step
from helpers import read_report

BUILD = "cargo build --release -p ferrisscript_test_harness"


def test_builds_then_runs_with_forwarded_flags(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    fake_bin.add("cargo")
    code = main(["harness", "run", "--all", "--filter", "arith", "--verbose", "--format", "tap"])
    assert code == 0
    run = "cargo run --release --bin ferris-test -- --all --filter arith --verbose --format tap"
    assert fake_bin.calls("cargo") == [BUILD, run]
    assert f"Running: {run}" in capsys.readouterr().out


def test_fast_skips_the_build(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo")
    assert main(["harness", "run", "--fast", "--script", "tests/hello.ferris"]) == 0
    assert fake_bin.calls("cargo") == ["cargo run --release --bin ferris-test -- --script tests/hello.ferris"]


def test_build_announces_release_mode_and_completion(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    fake_bin.add("cargo")
    assert main(["harness", "run", "--all"]) == 0
    out = capsys.readouterr().out
    assert "Building test harness in release mode..." in out
    assert "✅ Build complete" in out
    assert out.index("Build complete") < out.index("Running: cargo run")


def test_build_failure_stops_before_running(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo", 'case "$1" in build) exit 101 ;; esac\nexit 0')
    assert main(["harness", "run", "--all"]) == 101
    assert fake_bin.calls("cargo") == [BUILD]


def test_harness_failure_is_mirrored(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    fake_bin.add("cargo", 'case "$1" in run) exit 2 ;; esac\nexit 0')
    assert main(["harness", "run", "--all"]) == 2
    assert "Tests failed with exit code 2" in capsys.readouterr().err
    assert read_report(repo, "harness")["meta"]["exit_code"] == 2


def test_configured_package_and_binary(repo: Path, fake_bin) -> None:
    (repo / "ferrisctl.yaml").write_text("harness:\n  package: my_harness\n  binary: my-test\n", encoding="utf-8")
    fake_bin.add("cargo")
    assert main(["harness", "run"]) == 0
    assert fake_bin.calls("cargo") == [
        "cargo build --release -p my_harness",
        "cargo run --release --bin my-test --",
    ]


def test_harness_step_without_flags() -> None:
    assert harness_step("ferris-test").command == "cargo run --release --bin ferris-test --"
