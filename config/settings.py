import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

load_dotenv()


def _env_float(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass
class SpotifySettings:
    # lower-case names are the keys used by the original deployment's app settings
    client_id: str = field(default_factory=lambda: os.getenv("SPOTIFY_CLIENT_ID") or os.getenv("client_id", ""))
    client_secret: str = field(
        default_factory=lambda: os.getenv("SPOTIFY_CLIENT_SECRET") or os.getenv("client_secret", "")
    )
    api_base_url: str = field(
        default_factory=lambda: os.getenv("SPOTIFY_API_BASE_URL", "https://api.spotify.com/v1")
    )
    accounts_url: str = field(
        default_factory=lambda: os.getenv("SPOTIFY_ACCOUNTS_URL", "https://accounts.spotify.com/api/token")
    )
    web_player_url: str = field(
        default_factory=lambda: os.getenv("SPOTIFY_WEB_PLAYER_URL", "https://open.spotify.com")
    )
    timeout_seconds: float = field(default_factory=lambda: _env_float("SPOTIFY_TIMEOUT_SECONDS", 10.0))


@dataclass
class RetrySettings:
    max_attempts: int = field(default_factory=lambda: _env_int("SPOTIFY_RETRY_ATTEMPTS", 3))
    delay_seconds: float = field(default_factory=lambda: _env_float("SPOTIFY_RETRY_DELAY_SECONDS", 1.0))
    backoff_factor: float = field(default_factory=lambda: _env_float("SPOTIFY_RETRY_BACKOFF", 2.0))
    max_delay_seconds: float = field(default_factory=lambda: _env_float("SPOTIFY_RETRY_MAX_DELAY_SECONDS", 30.0))


@dataclass
class PlaylistSettings:
    max_tracked_playlists: int = field(default_factory=lambda: _env_int("MAX_TRACKED_PLAYLISTS", 200))
