from pydantic import BaseModel, ConfigDict, Field


class PreviewPlaylistRequest(BaseModel):
    playlist: str = Field(min_length=1, max_length=500, description="Playlist id or open.spotify.com URL")


class AddPlaylistRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    playlist: str = Field(min_length=1, max_length=500, description="Playlist id or open.spotify.com URL")
    is_fallback: bool = Field(
        default=False,
        alias="isFallback",
        description="Store with placeholder metadata (Spotify-generated playlists)",
    )
