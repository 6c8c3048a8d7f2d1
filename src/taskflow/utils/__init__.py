"""Shared helpers: logging, exit codes, typer utilities."""
