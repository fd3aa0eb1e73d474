"""Versioned JSON contracts for ferrisctl payloads."""
