import re
from typing import Optional

import requests

from config.logger import get_logger
from config.settings import RetrySettings, SpotifySettings
from playlist.application.port.spotify_client_port import SpotifyClientPort
from playlist.domain.exceptions import PlaylistNotFoundError, SpotifyApiError, SpotifyCredentialsError
from playlist.domain.playlist_metadata import PlaylistMetadata, UserProfile
from playlist.infrastructure.client.retry_policy import RetryPolicy
from playlist.infrastructure.client.token_cache import CachedTokenProvider

logger = get_logger(__name__)

PLAYLIST_FIELDS = "name,owner(display_name,id,external_urls),images,description"
BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)
# the public web page lists its tracks as music:song meta tags even when the Web API refuses the playlist
MUSIC_SONG_META = re.compile(
    r'<meta name="music:song" content="https://open\.spotify\.com/track/([a-zA-Z0-9]+)"'
)


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, SpotifyApiError):
        # 401 invalidates the cached token, so one more try runs with a fresh one
        return exc.is_transient or exc.status_code == 401
    return isinstance(exc, (requests.ConnectionError, requests.Timeout))


def _log_retry(attempt: int, delay: float, exc: BaseException) -> None:
    logger.warning("Spotify request failed (attempt %d), retrying in %.1fs: %s", attempt, delay, exc)


class SpotifyClient(SpotifyClientPort):
    """Client-credentials access to the Spotify Web API (public data only)."""

    def __init__(
        self,
        settings: SpotifySettings,
        retry_policy: RetryPolicy | None = None,
        session: requests.Session | None = None,
        token_provider: CachedTokenProvider | None = None,
    ):
        self.settings = settings
        self.session = session or requests.Session()
        self.session.headers.update({"Accept": "application/json"})
        self.retry_policy = retry_policy or RetryPolicy.from_settings(
            RetrySettings(),
            retry_on=(SpotifyApiError, requests.ConnectionError, requests.Timeout),
            should_retry=_is_transient,
            on_retry=_log_retry,
        )
        self.token_provider = token_provider or CachedTokenProvider(self._fetch_access_token)

    def get_access_token(self) -> str:
        return self.token_provider.get_token()

    def get_playlist_metadata(self, playlist_id: str) -> PlaylistMetadata:
        try:
            payload = self._get(f"playlists/{playlist_id}", params={"fields": PLAYLIST_FIELDS})
        except SpotifyApiError as exc:
            if exc.status_code == 404:
                raise PlaylistNotFoundError("Playlist not found") from exc
            raise
        return PlaylistMetadata.from_api(payload)

    def get_user_profile(self, user_id: str) -> UserProfile:
        return UserProfile.from_api(self._get(f"users/{user_id}"))

    def is_spotify_generated(self, playlist_id: str) -> bool:
        """
        Spotify-generated playlists 404 on the Web API but their public page still lists tracks.
        Any failure counts as "not generated".
        """
        try:
            response = self.session.get(
                f"{self.settings.web_player_url}/playlist/{playlist_id}",
                headers={"User-Agent": BROWSER_USER_AGENT},
                timeout=self.settings.timeout_seconds,
            )
        except requests.RequestException as exc:
            logger.error("Error checking spotify generated playlist %s: %s", playlist_id, exc)
            return False
        if not response.ok:
            return False
        return MUSIC_SONG_META.search(response.text) is not None

    def _get(self, endpoint: str, params: Optional[dict] = None) -> dict:
        return self.retry_policy.run(self._request, endpoint, params)

    def _request(self, endpoint: str, params: Optional[dict] = None) -> dict:
        url = f"{self.settings.api_base_url}/{endpoint}"
        response = self.session.get(
            url,
            params=params,
            headers={"Authorization": f"Bearer {self.get_access_token()}"},
            timeout=self.settings.timeout_seconds,
        )
        if response.status_code == 401:
            # token revoked or expired early
            self.token_provider.invalidate()
            raise SpotifyApiError(f"Spotify rejected the access token: {response.text}", status_code=401)
        if not response.ok:
            raise SpotifyApiError(
                f"Spotify request to {endpoint} failed: {response.text}", status_code=response.status_code
            )
        return response.json()

    def _fetch_access_token(self) -> tuple[str, float]:
        if not self.settings.client_id or not self.settings.client_secret:
            raise SpotifyCredentialsError("Missing Spotify credentials in environment variables")

        response = self.session.post(
            self.settings.accounts_url,
            data={"grant_type": "client_credentials"},
            auth=(self.settings.client_id, self.settings.client_secret),
            timeout=self.settings.timeout_seconds,
        )
        if not response.ok:
            raise SpotifyApiError(
                f"Failed to fetch Spotify access token: {response.text}", status_code=response.status_code
            )
        data = response.json()
        logger.info("Spotify access token refreshed, expires in %ss", data.get("expires_in"))
        return data["access_token"], float(data.get("expires_in", 3600))
