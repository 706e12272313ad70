"""Task manager web frontend."""

__version__ = "0.1.0"
