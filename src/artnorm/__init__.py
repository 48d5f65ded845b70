"""artnorm: forensic artifact record normalizer."""

__version__ = "0.1.0"
