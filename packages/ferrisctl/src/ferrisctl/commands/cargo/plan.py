from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

from ...execution.steps import Step

CLIPPY_STRICT = ("--", "-D", "warnings")
COVERAGE_BACKENDS = ("llvm-cov", "tarpaulin")
COVERAGE_TOOLS = {"llvm-cov": "cargo-llvm-cov", "tarpaulin": "cargo-tarpaulin"}
_SKIP_DIRS = {"target", "node_modules", ".git"}


def fmt_steps(*, check: bool = False) -> list[Step]:
    if check:
        return [Step("Checking Rust formatting", ("cargo", "fmt", "--all", "--", "--check"), "Run 'ferrisctl fmt' to fix formatting.")]
    return [Step("Formatting all Rust code", ("cargo", "fmt", "--all"))]


def lint_steps() -> list[Step]:
    return [
        Step(
            "Running clippy on workspace",
            ("cargo", "clippy", "--workspace", "--all-targets", "--all-features", *CLIPPY_STRICT),
        )
    ]


def test_steps(extra_args: Sequence[str] = ()) -> list[Step]:
    return [Step("Running all workspace tests", ("cargo", "test", "--workspace", *extra_args))]


def bench_steps(package: str) -> list[Step]:
    return [Step(f"Running benchmarks for {package}", ("cargo", "bench", "--package", package))]


def coverage_install_steps(backend: str) -> list[Step]:
    if backend == "tarpaulin":
        return [Step("Installing cargo-tarpaulin", ("cargo", "install", "cargo-tarpaulin"))]
    return [
        Step("Installing llvm-tools-preview component", ("rustup", "component", "add", "llvm-tools-preview")),
        Step("Installing cargo-llvm-cov", ("cargo", "install", "cargo-llvm-cov")),
    ]


def coverage_run_steps(backend: str, output_dir: str) -> list[Step]:
    if backend == "tarpaulin":
        return [
            Step(
                "Collecting coverage with tarpaulin",
                ("cargo", "tarpaulin", "--workspace", "--out", "Html", "--out", "Lcov", "--output-dir", output_dir),
            )
        ]
    return [
        Step("Generating HTML coverage report", ("cargo", "llvm-cov", "--workspace", "--html", "--output-dir", output_dir)),
        Step(
            "Generating LCOV coverage report",
            ("cargo", "llvm-cov", "--workspace", "--lcov", "--output-path", f"{output_dir}/lcov.info"),
        ),
    ]


def coverage_report_files(backend: str, output_dir: str) -> dict[str, str]:
    if backend == "tarpaulin":
        return {"html": f"{output_dir}/tarpaulin-report.html", "lcov": f"{output_dir}/lcov.info"}
    return {"html": f"{output_dir}/html/index.html", "lcov": f"{output_dir}/lcov.info"}


def pre_commit_steps() -> list[Step]:
    return [
        Step("Checking code formatting", ("cargo", "fmt", "--check"), "Run 'cargo fmt' or 'ferrisctl fmt' to fix formatting."),
        Step(
            "Running clippy linting",
            ("cargo", "clippy", "--workspace", "--all-targets", *CLIPPY_STRICT),
            "Fix clippy warnings above or run 'ferrisctl lint' for details.",
        ),
        Step("Running quick tests", ("cargo", "test", "--workspace", "--lib"), "Fix failing tests or run 'ferrisctl test' for full output."),
    ]


def workspace_manifests(repo_root: Path) -> list[Path]:
    manifests: list[Path] = []
    for path in sorted(repo_root.rglob("Cargo.toml")):
        rel_parts = path.relative_to(repo_root).parts
        if _SKIP_DIRS.intersection(rel_parts):
            continue
        manifests.append(path)
    return manifests


def declares_criterion(repo_root: Path) -> bool:
    for manifest in workspace_manifests(repo_root):
        if "criterion" in manifest.read_text(encoding="utf-8", errors="replace"):
            return True
    return False
