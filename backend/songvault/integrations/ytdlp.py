"""yt-dlp wrapper for video-platform metadata."""
import asyncio
import json
from dataclasses import dataclass
from typing import Optional

from songvault.config import settings
from songvault.errors import SourceUnreadableError


@dataclass
class VideoInfo:
    title: str
    author: str
    duration: Optional[float]


class YtdlpClient:
    """Wrapper for yt-dlp CLI. Only fetches metadata, never downloads."""

    WATCH_URL = "https://www.youtube.com/watch?v={video_id}"

    def __init__(self, executable: Optional[str] = None):
        self.executable = executable or settings.ytdlp_path

    async def get_info(self, video_id: str) -> VideoInfo:
        """Get title, author and duration of a video.

        Raises:
            SourceUnreadableError: If yt-dlp is missing or the lookup fails
        """
        cmd = [
            self.executable,
            "--dump-json",
            "--no-download",
            "--no-playlist",
            self.WATCH_URL.format(video_id=video_id)
        ]

        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE
            )
        except OSError as e:
            raise SourceUnreadableError(f"Failed to fetch video info: {video_id}", detail=str(e)) from e

        stdout, stderr = await process.communicate()

        if process.returncode != 0:
            raise SourceUnreadableError(
                f"Failed to fetch video info: {video_id}",
                detail=stderr.decode(errors="replace").strip() or "yt-dlp failed"
            )

        try:
            data = json.loads(stdout.decode())
        except json.JSONDecodeError as e:
            raise SourceUnreadableError(f"Failed to fetch video info: {video_id}", detail=str(e)) from e

        return VideoInfo(
            title=data.get("track") or data.get("title") or video_id,
            author=data.get("artist") or data.get("uploader") or data.get("channel") or "",
            duration=data.get("duration"),
        )
