"""tablekit CLI commands."""
