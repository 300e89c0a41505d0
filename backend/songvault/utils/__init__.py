"""Utility functions."""
from songvault.utils.formatting import format_duration
from songvault.utils.paths import ensure_directory, unique_upload_name

__all__ = [
    "format_duration",
    "ensure_directory",
    "unique_upload_name",
]
