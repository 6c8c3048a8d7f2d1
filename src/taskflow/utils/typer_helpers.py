"""Typer helper utilities."""

from difflib import get_close_matches

import click
from typer.core import TyperGroup


def suggest_commands(attempted: str, commands: list[str]) -> list[str]:
    """Return up to three command names close to *attempted*."""
    return get_close_matches(attempted, commands, n=3, cutoff=0.6)


class SuggestingGroup(TyperGroup):
    """Typer group that names the closest commands when one is mistyped.

    ``taskflow tasks lst`` fails as a usage error (exit code 2) that names
    ``list``. Typer releases with built-in suggestions produce the hint
    themselves and it is passed through unchanged.
    """

    def resolve_command(self, ctx, args):
        try:
            return super().resolve_command(ctx, args)
        except click.UsageError as e:
            # Newer typer releases already append their own suggestion
            if not args or "Did you mean" in e.message:
                raise
            suggestions = suggest_commands(args[0], self.list_commands(ctx))
            if not suggestions:
                raise
            raise click.UsageError(
                f"No such command '{args[0]}'. Did you mean: {', '.join(suggestions)}?",
                ctx=ctx,
            ) from e
