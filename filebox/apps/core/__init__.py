"""Shared pieces used by every app: base exception and JSON helpers."""
