"""Typer sub-applications mounted by :mod:`taskflow.main`."""
