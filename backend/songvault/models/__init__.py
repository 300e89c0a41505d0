"""SQLAlchemy models for Songvault."""
from songvault.models.artist import Artist
from songvault.models.album import Album
from songvault.models.song import Song
from songvault.models.playlist import Playlist, PlaylistSong

__all__ = [
    "Artist",
    "Album",
    "Song",
    "Playlist",
    "PlaylistSong",
]
