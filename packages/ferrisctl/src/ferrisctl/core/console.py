"""Colored human-facing console output."""

from __future__ import annotations

from rich.console import Console as RichConsole
from rich.text import Text

BANNER_RULE = "=" * 42


class Console:
    def __init__(self, *, quiet: bool = False, color: bool = True, to_stderr: bool = False) -> None:
        self.quiet = quiet
        self._rich = RichConsole(
            stderr=to_stderr,
            no_color=not color,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )
        self._err = RichConsole(
            stderr=True,
            no_color=not color,
            highlight=False,
            markup=False,
            emoji=False,
            soft_wrap=True,
        )

    def line(self, text: str = "", style: str | None = None) -> None:
        if self.quiet:
            return
        self._rich.print(Text(text, style=style or ""))

    def banner(self, title: str) -> None:
        self.line(BANNER_RULE)
        self.line(title, style="bold")
        self.line(BANNER_RULE)
        self.line()

    def closing_banner(self, message: str, *, ok: bool, notes: tuple[str, ...] = ()) -> None:
        self.line()
        self.line(BANNER_RULE)
        if ok:
            self.success(message)
        else:
            self.error(message)
        for note in notes:
            self.line(note)
        self.line(BANNER_RULE)

    def info(self, text: str) -> None:
        self.line(f"ℹ️  {text}", style="cyan")

    def success(self, text: str) -> None:
        self.line(f"✅ {text}", style="green")

    def warning(self, text: str) -> None:
        self.line(f"⚠️  {text}", style="yellow")

    def error(self, text: str) -> None:
        # Errors are shown even in quiet mode.
        self._err.print(Text(f"❌ {text}", style="red"))
