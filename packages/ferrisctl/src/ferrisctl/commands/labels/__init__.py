from .command import configure_labels_parser, run_labels_command

__all__ = ["configure_labels_parser", "run_labels_command"]
