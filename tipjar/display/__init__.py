"""Terminal display for tipjar."""
