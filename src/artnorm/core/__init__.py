"""Core utilities: configuration, errors and logging."""
