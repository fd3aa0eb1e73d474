from __future__ import annotations

import json
from pathlib import Path

import pytest

from ferrisctl.cli.main import main
from helpers import read_report

LLVM_HTML = "cargo llvm-cov --workspace --html --output-dir target/coverage"
LLVM_LCOV = "cargo llvm-cov --workspace --lcov --output-path target/coverage/lcov.info"


def test_coverage_with_llvm_cov_installed(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    fake_bin.add("cargo")
    fake_bin.add("cargo-llvm-cov")
    assert main(["coverage"]) == 0
    assert fake_bin.calls("cargo") == [LLVM_HTML, LLVM_LCOV]
    assert (repo / "target/coverage").is_dir()
    out = capsys.readouterr().out
    assert "target/coverage/html/index.html" in out
    assert read_report(repo, "coverage")["meta"]["reports"]["lcov"] == "target/coverage/lcov.info"


def test_missing_tool_is_installed_first(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo")
    fake_bin.add("rustup")
    assert main(["coverage"]) == 0
    assert fake_bin.calls("rustup") == ["rustup component add llvm-tools-preview"]
    assert fake_bin.calls("cargo") == ["cargo install cargo-llvm-cov", LLVM_HTML, LLVM_LCOV]


def test_install_failure_exits_one(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo", 'case "$1" in install) exit 101 ;; esac\nexit 0')
    fake_bin.add("rustup")
    assert main(["coverage"]) == 1
    assert fake_bin.calls("cargo") == ["cargo install cargo-llvm-cov"]
    assert read_report(repo, "coverage")["errors"][0] == "failed to install cargo-llvm-cov"


def test_no_install_fails_fast(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo")
    assert main(["coverage", "--no-install"]) == 1
    assert fake_bin.calls("cargo") == []


def test_tarpaulin_backend_and_output_dir(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo")
    fake_bin.add("cargo-tarpaulin")
    assert main(["coverage", "--backend", "tarpaulin", "--output-dir", "cov"]) == 0
    assert fake_bin.calls("cargo") == ["cargo tarpaulin --workspace --out Html --out Lcov --output-dir cov"]


def test_backend_from_config_file(repo: Path, fake_bin, capsys: pytest.CaptureFixture[str]) -> None:
    (repo / "ferrisctl.yaml").write_text("coverage:\n  backend: tarpaulin\n", encoding="utf-8")
    assert main(["--json", "coverage", "--explain"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["planned_steps"] == [
        "cargo install cargo-tarpaulin",
        "cargo tarpaulin --workspace --out Html --out Lcov --output-dir target/coverage",
    ]


def test_coverage_failure_mirrors_cargo(repo: Path, fake_bin) -> None:
    fake_bin.add("cargo", "exit 101")
    fake_bin.add("cargo-llvm-cov")
    assert main(["coverage"]) == 101
    assert fake_bin.calls("cargo") == [LLVM_HTML]
