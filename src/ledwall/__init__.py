"""LED video wall deployment planning."""

__version__ = "0.1.0"
