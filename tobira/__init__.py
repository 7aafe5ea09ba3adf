"""Tobira (文学の扉) - read Japanese literature in original and simplified form."""

__version__ = "0.1.0"
