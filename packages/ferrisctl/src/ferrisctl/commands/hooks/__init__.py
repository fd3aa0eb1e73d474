from .command import configure_hooks_parser, run_hooks_command

__all__ = ["configure_hooks_parser", "run_hooks_command"]
