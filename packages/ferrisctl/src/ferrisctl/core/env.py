"""Centralized environment variable helpers."""

from __future__ import annotations

import os


def getenv(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def env_flag(name: str) -> bool:
    return (os.environ.get(name) or "").strip().lower() not in {"", "0", "false", "no", "off"}
