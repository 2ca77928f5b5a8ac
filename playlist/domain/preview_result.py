from dataclasses import dataclass
from typing import Optional

from playlist.domain.playlist_metadata import PlaylistMetadata

PREVIEW_SUCCESS = "success"
PREVIEW_FALLBACK = "fallback"
PREVIEW_EXISTS = "exists"
PREVIEW_ERROR = "error"


@dataclass
class PreviewResult:
    # success: metadata found / fallback: unreadable, can still be added as Spotify-generated
    type: str
    playlist_id: str
    metadata: Optional[PlaylistMetadata] = None
    message: Optional[str] = None
    # only set on fallback: whether the public page still lists tracks
    spotify_generated: Optional[bool] = None
