"""tipjar commands."""
