from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SpotifyImage:
    url: str
    height: Optional[int] = None
    width: Optional[int] = None

    @classmethod
    def from_api(cls, payload: dict) -> "SpotifyImage":
        return cls(url=payload.get("url"), height=payload.get("height"), width=payload.get("width"))


@dataclass
class UserProfile:
    id: str
    display_name: Optional[str] = None
    images: List[SpotifyImage] = field(default_factory=list)
    external_urls: dict = field(default_factory=dict)

    @classmethod
    def from_api(cls, payload: dict) -> "UserProfile":
        return cls(
            id=payload.get("id"),
            display_name=payload.get("display_name"),
            images=[SpotifyImage.from_api(image) for image in payload.get("images") or []],
            external_urls=payload.get("external_urls") or {},
        )


@dataclass
class PlaylistMetadata:
    name: str
    owner: UserProfile
    images: List[SpotifyImage] = field(default_factory=list)
    description: Optional[str] = None

    @classmethod
    def from_api(cls, payload: dict) -> "PlaylistMetadata":
        return cls(
            name=payload.get("name", ""),
            owner=UserProfile.from_api(payload.get("owner") or {}),
            images=[SpotifyImage.from_api(image) for image in payload.get("images") or []],
            description=payload.get("description"),
        )

    @property
    def cover_url(self) -> Optional[str]:
        return self.images[0].url if self.images else None
