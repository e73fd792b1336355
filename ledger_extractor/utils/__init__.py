"""Logging and validation helpers."""
