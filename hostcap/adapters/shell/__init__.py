"""Shell-based connections."""
