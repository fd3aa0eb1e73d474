"""CLI registration tables."""

from __future__ import annotations

CONFIGURE_HOOKS: tuple[tuple[str, str], ...] = (
    ("ferrisctl.commands.cargo.command", "configure_cargo_parsers"),
    ("ferrisctl.commands.docs.command", "configure_docs_parser"),
    ("ferrisctl.commands.hooks.command", "configure_hooks_parser"),
    ("ferrisctl.commands.labels.command", "configure_labels_parser"),
    ("ferrisctl.commands.harness.command", "configure_harness_parser"),
)

RUN_HOOKS: dict[str, tuple[str, str]] = {
    "fmt": ("ferrisctl.commands.cargo.command", "run_cargo_command"),
    "lint": ("ferrisctl.commands.cargo.command", "run_cargo_command"),
    "test": ("ferrisctl.commands.cargo.command", "run_cargo_command"),
    "bench": ("ferrisctl.commands.cargo.command", "run_cargo_command"),
    "coverage": ("ferrisctl.commands.cargo.command", "run_cargo_command"),
    "docs": ("ferrisctl.commands.docs.command", "run_docs_command"),
    "hooks": ("ferrisctl.commands.hooks.command", "run_hooks_command"),
    "labels": ("ferrisctl.commands.labels.command", "run_labels_command"),
    "harness": ("ferrisctl.commands.harness.command", "run_harness_command"),
}
