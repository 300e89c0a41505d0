"""ExifTool integration for audio tag extraction."""
import asyncio
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from songvault.config import settings
from songvault.errors import SourceUnreadableError


@dataclass
class ParsedTags:
    """Descriptive tags of one audio file. Missing tags are None."""
    title: Optional[str]
    artist: Optional[str]
    album: Optional[str]
    duration: float  # seconds


class ExifToolClient:
    """Wrapper for ExifTool CLI.

    Reads title, performer, album and duration. Tags may carry a format
    prefix (ID3:, FLAC:, Vorbis:, QuickTime:) depending on the container.
    """

    AUDIO_TAGS = [
        "Title",
        "Artist",
        "Album",
        "Duration",
        "FileType",
    ]

    TAG_PREFIXES = ["FLAC:", "ID3:", "Vorbis:", "QuickTime:", "MPEG:"]

    def __init__(self, executable: Optional[str] = None):
        self.executable = executable or settings.exiftool_path

    async def read_tags(self, path: Path) -> ParsedTags:
        """Extract tags from an audio file.

        Raises:
            SourceUnreadableError: If exiftool is missing, fails, or does not
                recognise the file
        """
        cmd = [
            self.executable,
            "-json",
            "-n",  # Numeric values
            *[f"-{tag}" for tag in self.AUDIO_TAGS],
            str(path)
        ]

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            raise SourceUnreadableError(f"Failed to read file: {path}", detail=str(e)) from e

        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            raise SourceUnreadableError(
                f"Failed to read file: {path}",
                detail=stderr.decode(errors="replace").strip() or "exiftool failed"
            )

        try:
            data = json.loads(stdout.decode())[0]
        except (json.JSONDecodeError, IndexError) as e:
            raise SourceUnreadableError(f"Failed to read file: {path}", detail=str(e)) from e

        if data.get("Error"):
            raise SourceUnreadableError(f"Failed to read file: {path}", detail=data["Error"])

        return self._normalize_tags(data)

    def _normalize_tags(self, data: dict) -> ParsedTags:
        def get_first(*keys):
            """Get first non-empty value from multiple possible tag names."""
            for key in keys:
                if key in data and data[key] not in (None, ""):
                    return data[key]
                for prefix in self.TAG_PREFIXES:
                    prefixed = f"{prefix}{key}"
                    if prefixed in data and data[prefixed] not in (None, ""):
                        return data[prefixed]
            return None

        def as_text(value) -> Optional[str]:
            if value is None:
                return None
            text = str(value).strip()
            return text or None

        try:
            duration = float(get_first("Duration") or 0)
        except (TypeError, ValueError):
            duration = 0.0

        return ParsedTags(
            title=as_text(get_first("Title")),
            artist=as_text(get_first("Artist")),
            album=as_text(get_first("Album")),
            duration=duration,
        )
