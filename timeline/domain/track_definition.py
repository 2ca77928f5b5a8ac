from dataclasses import dataclass
from typing import Optional


@dataclass
class TrackDefinition:
    id: str
    name: Optional[str] = None
    artist: Optional[str] = None
    album_art: Optional[str] = None
