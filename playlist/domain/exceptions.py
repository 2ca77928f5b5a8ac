class PlaylistNotFoundError(ValueError):
    """Spotify has no playlist with the requested id (or it is private)."""


class PlaylistAlreadyTrackedError(ValueError):
    pass


class PlaylistLimitReachedError(ValueError):
    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Maximum limit of {limit} playlists reached.")


class SpotifyCredentialsError(RuntimeError):
    pass


class SpotifyApiError(RuntimeError):
    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def is_transient(self) -> bool:
        return self.status_code is None or self.status_code == 429 or self.status_code >= 500
