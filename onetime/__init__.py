"""One-time activation and reminder tokens with atomic completion."""

__version__ = "0.1.0"
