"""artnorm command-line interface."""
