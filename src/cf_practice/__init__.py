"""Codeforces practice workspace CLI."""

__version__ = "0.3.0"
