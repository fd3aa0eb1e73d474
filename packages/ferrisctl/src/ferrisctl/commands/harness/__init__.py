from .command import configure_harness_parser, run_harness_command

__all__ = ["configure_harness_parser", "run_harness_command"]
