"""Shared runtime primitives for ferrisctl commands."""
