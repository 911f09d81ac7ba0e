"""Content Studio - multi-phase YouTube content package generation."""

__version__ = "0.1.0"
