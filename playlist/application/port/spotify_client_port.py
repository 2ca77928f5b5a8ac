from abc import ABC, abstractmethod

from playlist.domain.playlist_metadata import PlaylistMetadata, UserProfile


class SpotifyClientPort(ABC):
    @abstractmethod
    def get_playlist_metadata(self, playlist_id: str) -> PlaylistMetadata:
        raise NotImplementedError

    @abstractmethod
    def get_user_profile(self, user_id: str) -> UserProfile:
        raise NotImplementedError

    @abstractmethod
    def is_spotify_generated(self, playlist_id: str) -> bool:
        raise NotImplementedError
