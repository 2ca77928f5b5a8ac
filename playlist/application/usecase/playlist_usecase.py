from typing import List

from config.logger import get_logger
from config.settings import PlaylistSettings
from playlist.application.port.playlist_repository_port import PlaylistRepositoryPort
from playlist.application.port.spotify_client_port import SpotifyClientPort
from playlist.domain.exceptions import PlaylistAlreadyTrackedError, PlaylistLimitReachedError
from playlist.domain.playlist import Playlist
from playlist.domain.playlist_metadata import PlaylistMetadata
from playlist.domain.preview_result import (
    PREVIEW_ERROR,
    PREVIEW_EXISTS,
    PREVIEW_FALLBACK,
    PREVIEW_SUCCESS,
    PreviewResult,
)

logger = get_logger(__name__)

PLAYLIST_URL_MARKER = "spotify.com/playlist/"


def extract_playlist_id(value: str) -> str:
    """Accept either a bare playlist id or an open.spotify.com playlist URL."""
    value = (value or "").strip()
    if PLAYLIST_URL_MARKER in value:
        tail = value.split(PLAYLIST_URL_MARKER, 1)[1]
        return tail.split("?", 1)[0].strip("/")
    return value


class PlaylistUseCase:
    def __init__(
        self,
        repository: PlaylistRepositoryPort,
        spotify_client: SpotifyClientPort,
        settings: PlaylistSettings | None = None,
    ):
        self.repository = repository
        self.spotify_client = spotify_client
        self.settings = settings or PlaylistSettings()

    def list_playlists(self) -> List[Playlist]:
        return self.repository.list_all()

    def get_metadata(self, playlist_id: str) -> PlaylistMetadata:
        """
        Playlist metadata with the owner's profile images filled in;
        the playlist endpoint itself does not return owner images.
        """
        metadata = self.spotify_client.get_playlist_metadata(playlist_id)
        if metadata.owner.id and not metadata.owner.images:
            try:
                profile = self.spotify_client.get_user_profile(metadata.owner.id)
                metadata.owner.images = profile.images
            except Exception as exc:
                logger.warning("Owner profile lookup failed for %s: %s", metadata.owner.id, exc)
        return metadata

    def preview_playlist(self, playlist_id: str) -> PreviewResult:
        try:
            limit = self.settings.max_tracked_playlists
            if self.repository.count() >= limit:
                return PreviewResult(
                    type=PREVIEW_ERROR,
                    playlist_id=playlist_id,
                    message=str(PlaylistLimitReachedError(limit)),
                )
            if self.repository.exists(playlist_id):
                return PreviewResult(
                    type=PREVIEW_EXISTS,
                    playlist_id=playlist_id,
                    message="This playlist is already being tracked.",
                )
        except Exception:
            logger.exception("Preview error for playlist=%s", playlist_id)
            return PreviewResult(
                type=PREVIEW_ERROR, playlist_id=playlist_id, message="An unexpected error occurred."
            )

        try:
            metadata = self.spotify_client.get_playlist_metadata(playlist_id)
        except Exception as exc:
            # unreadable through the Web API (Spotify-generated or private); can still be tracked
            logger.info("Metadata fetch failed for %s, falling back: %s", playlist_id, exc)
            return PreviewResult(
                type=PREVIEW_FALLBACK,
                playlist_id=playlist_id,
                spotify_generated=self.spotify_client.is_spotify_generated(playlist_id),
            )
        return PreviewResult(type=PREVIEW_SUCCESS, playlist_id=playlist_id, metadata=metadata)

    def add_playlist(self, playlist_id: str, is_fallback: bool) -> Playlist:
        limit = self.settings.max_tracked_playlists
        if self.repository.count() >= limit:
            raise PlaylistLimitReachedError(limit)
        if self.repository.exists(playlist_id):
            raise PlaylistAlreadyTrackedError("This playlist is already being tracked.")

        if is_fallback:
            playlist = Playlist.placeholder(playlist_id)
        else:
            # fetched again so the stored row reflects the latest name/cover
            metadata = self.spotify_client.get_playlist_metadata(playlist_id)
            playlist = Playlist(
                playlist_id=playlist_id,
                name=metadata.name,
                owner_id=metadata.owner.id,
                owner_display_name=metadata.owner.display_name,
                art_url=metadata.cover_url,
                is_ordered=False,
                is_spotify_generated=False,
            )

        saved = self.repository.save(playlist)
        logger.info("Playlist added | id=%s fallback=%s", playlist_id, is_fallback)
        return saved
