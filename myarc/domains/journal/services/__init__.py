"""Journal services."""
