from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

UNKNOWN_PLAYLIST_NAME = "Unknown Playlist"
SPOTIFY_OWNER_ID = "spotify"


@dataclass
class Playlist:
    """
    A playlist whose track ranks are being recorded.
    Spotify-generated playlists (Daily Mix, Discover Weekly, ...) cannot be read through the Web API,
    so they are stored with placeholder metadata and flagged is_spotify_generated.
    """
    playlist_id: str
    name: str
    owner_id: Optional[str] = None
    owner_display_name: Optional[str] = None
    art_url: Optional[str] = None
    is_ordered: bool = False
    is_spotify_generated: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def placeholder(cls, playlist_id: str) -> "Playlist":
        return cls(
            playlist_id=playlist_id,
            name=UNKNOWN_PLAYLIST_NAME,
            owner_id=SPOTIFY_OWNER_ID,
            is_ordered=True,
            is_spotify_generated=True,
        )
