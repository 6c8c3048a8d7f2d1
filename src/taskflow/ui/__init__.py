"""Terminal output: console themes and formatters."""
