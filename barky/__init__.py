"""Flatten nested data into dotted keys, parse key paths and store flat values with conflict checks."""

__version__ = "0.1.0"
__all__ = ["flat", "path", "store"]