from .command import configure_docs_parser, run_docs_command

__all__ = ["configure_docs_parser", "run_docs_command"]
