"""Songvault - personal music catalog."""
__version__ = "0.1.0"
