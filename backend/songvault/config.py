"""Application configuration from environment variables."""
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    database_url: str = "sqlite:///./songvault.db"

    # Uploads
    upload_dir: str = "./uploads"
    allowed_upload_extensions: list[str] = [".mp3", ".flac", ".m4a"]
    max_upload_bytes: int = 200 * 1024 * 1024  # 200MB

    # Fallback names when tags are missing
    default_artist_name: str = "Unknown Artist"
    default_album_title: str = "Unknown Album"
    upload_album_title: str = "Uploads"
    external_album_title: str = "YouTube Imports"
    external_path_prefix: str = "YT:"  # file_path token for video-platform songs

    # External tools
    exiftool_path: str = "exiftool"
    ytdlp_path: str = "yt-dlp"

    # HTTP
    cors_origins: str = "*"

    # Logging
    log_level: str = "info"
    log_path: str = ""

    class Config:
        env_file = (".env", "../.env")  # Check both backend/ and parent dir
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
