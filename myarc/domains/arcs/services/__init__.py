"""Daily arc and momentum services."""
