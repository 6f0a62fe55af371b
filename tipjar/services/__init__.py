"""Services backing the tip engine."""
