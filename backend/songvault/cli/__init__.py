"""Songvault command line interface."""
