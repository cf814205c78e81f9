"""Infrastructure — process-wide concerns."""
