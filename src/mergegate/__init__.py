"""mergegate - release workflow merge-permission checks."""

__version__ = "1.0.0"
