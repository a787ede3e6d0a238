"""pagegate — wait/verify layer for page-object UI tests."""

__version__ = "0.1.0"
