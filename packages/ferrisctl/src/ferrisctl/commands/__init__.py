"""ferrisctl subcommands."""
