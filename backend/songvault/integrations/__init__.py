"""External tool integrations."""
from songvault.integrations.exiftool import ExifToolClient, ParsedTags
from songvault.integrations.ytdlp import YtdlpClient, VideoInfo

__all__ = [
    "ExifToolClient",
    "ParsedTags",
    "YtdlpClient",
    "VideoInfo",
]
