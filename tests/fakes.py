from playlist.application.port.playlist_repository_port import PlaylistRepositoryPort
from playlist.application.port.spotify_client_port import SpotifyClientPort
from playlist.domain.exceptions import PlaylistAlreadyTrackedError, PlaylistNotFoundError
from playlist.domain.playlist_metadata import PlaylistMetadata, SpotifyImage, UserProfile


def make_metadata(name="Daily Climb", owner_images=None):
    return PlaylistMetadata(
        name=name,
        owner=UserProfile(
            id="owner1",
            display_name="Owner One",
            images=owner_images or [],
            external_urls={"spotify": "https://open.spotify.com/user/owner1"},
        ),
        images=[SpotifyImage(url="https://i.scdn.co/image/cover", height=640, width=640)],
        description="ranked daily",
    )


class InMemoryPlaylistRepository(PlaylistRepositoryPort):
    def __init__(self, playlists=None, fail=False):
        self.playlists = {p.playlist_id: p for p in playlists or []}
        self.fail = fail

    def list_all(self):
        return sorted(self.playlists.values(), key=lambda p: p.name)

    def count(self):
        if self.fail:
            raise RuntimeError("database unavailable")
        return len(self.playlists)

    def exists(self, playlist_id):
        return playlist_id in self.playlists

    def save(self, playlist):
        if playlist.playlist_id in self.playlists:
            raise PlaylistAlreadyTrackedError("This playlist is already being tracked.")
        self.playlists[playlist.playlist_id] = playlist
        return playlist


class FakeSpotifyClient(SpotifyClientPort):
    def __init__(self, metadata=None, profile=None, generated=False, error=None):
        self.metadata = metadata
        self.profile = profile
        self.generated = generated
        self.error = error
        self.metadata_calls = 0

    def get_playlist_metadata(self, playlist_id):
        self.metadata_calls += 1
        if self.error:
            raise self.error
        if self.metadata is None:
            raise PlaylistNotFoundError("Playlist not found")
        return self.metadata

    def get_user_profile(self, user_id):
        if self.profile is None:
            raise RuntimeError("profile lookup failed")
        return self.profile

    def is_spotify_generated(self, playlist_id):
        return self.generated
