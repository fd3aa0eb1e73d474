from .command import configure_cargo_parsers, run_cargo_command

__all__ = ["configure_cargo_parsers", "run_cargo_command"]
