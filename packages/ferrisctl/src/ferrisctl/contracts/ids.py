from __future__ import annotations

CONFIG = "ferrisctl.config.v1"
OUTPUT = "ferrisctl.output.v1"
COMMANDS = "ferrisctl.commands.v1"
ERROR = "ferrisctl.error.v1"
