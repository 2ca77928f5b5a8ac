import pytest
import requests

from config.settings import SpotifySettings
from playlist.domain.exceptions import PlaylistNotFoundError, SpotifyApiError, SpotifyCredentialsError
from playlist.infrastructure.client.retry_policy import RetryPolicy
from playlist.infrastructure.client.spotify_client import SpotifyClient, _is_transient


class FakeResponse:
    def __init__(self, status_code=200, payload=None, text=""):
        self.status_code = status_code
        self._payload = payload
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        return self._payload


class FakeSession:
    """Replays queued responses (or raises queued exceptions) for GET and POST."""

    def __init__(self, gets=None, posts=None):
        self.headers = {}
        self.gets = list(gets or [])
        self.posts = list(posts or [])
        self.get_calls = []
        self.post_calls = []

    def get(self, url, **kwargs):
        self.get_calls.append((url, kwargs))
        return self._next(self.gets)

    def post(self, url, **kwargs):
        self.post_calls.append((url, kwargs))
        return self._next(self.posts)

    @staticmethod
    def _next(queue):
        item = queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _token(value="tok", expires_in=3600):
    return FakeResponse(200, {"access_token": value, "token_type": "Bearer", "expires_in": expires_in})


def _settings(**overrides):
    values = dict(
        client_id="cid",
        client_secret="secret",
        api_base_url="https://api.spotify.test/v1",
        accounts_url="https://accounts.spotify.test/api/token",
        web_player_url="https://open.spotify.test",
        timeout_seconds=5.0,
    )
    values.update(overrides)
    return SpotifySettings(**values)


def _client(session, **settings):
    policy = RetryPolicy(
        max_attempts=3,
        retry_on=(SpotifyApiError, requests.ConnectionError, requests.Timeout),
        should_retry=_is_transient,
        sleep=lambda _: None,
    )
    return SpotifyClient(_settings(**settings), retry_policy=policy, session=session)


PLAYLIST_PAYLOAD = {
    "name": "Daily Climb",
    "description": "ranked daily",
    "images": [{"url": "https://i.scdn.co/image/cover", "height": 640, "width": 640}],
    "owner": {
        "id": "owner1",
        "display_name": "Owner One",
        "external_urls": {"spotify": "https://open.spotify.com/user/owner1"},
    },
}


def test_playlist_metadata_uses_bearer_token_and_fields():
    session = FakeSession(gets=[FakeResponse(200, PLAYLIST_PAYLOAD)], posts=[_token()])

    metadata = _client(session).get_playlist_metadata("p1")

    assert metadata.name == "Daily Climb"
    assert metadata.owner.id == "owner1"
    assert metadata.cover_url == "https://i.scdn.co/image/cover"
    url, kwargs = session.get_calls[0]
    assert url == "https://api.spotify.test/v1/playlists/p1"
    assert kwargs["params"] == {"fields": "name,owner(display_name,id,external_urls),images,description"}
    assert kwargs["headers"]["Authorization"] == "Bearer tok"
    token_url, token_kwargs = session.post_calls[0]
    assert token_url == "https://accounts.spotify.test/api/token"
    assert token_kwargs["data"] == {"grant_type": "client_credentials"}
    assert token_kwargs["auth"] == ("cid", "secret")


def test_token_is_cached_between_calls():
    session = FakeSession(
        gets=[FakeResponse(200, PLAYLIST_PAYLOAD), FakeResponse(200, {"id": "owner1", "images": []})],
        posts=[_token()],
    )
    client = _client(session)

    client.get_playlist_metadata("p1")
    profile = client.get_user_profile("owner1")

    assert profile.id == "owner1"
    assert len(session.post_calls) == 1


def test_playlist_not_found():
    session = FakeSession(gets=[FakeResponse(404, text="Not found")], posts=[_token()])

    with pytest.raises(PlaylistNotFoundError):
        _client(session).get_playlist_metadata("missing")
    assert len(session.get_calls) == 1


def test_server_errors_are_retried():
    session = FakeSession(
        gets=[
            FakeResponse(503, text="unavailable"),
            requests.ConnectionError("reset"),
            FakeResponse(200, PLAYLIST_PAYLOAD),
        ],
        posts=[_token()],
    )

    assert _client(session).get_playlist_metadata("p1").name == "Daily Climb"
    assert len(session.get_calls) == 3


def test_client_errors_are_not_retried():
    session = FakeSession(gets=[FakeResponse(400, text="bad request")], posts=[_token()])

    with pytest.raises(SpotifyApiError) as exc_info:
        _client(session).get_user_profile("u1")
    assert exc_info.value.status_code == 400
    assert len(session.get_calls) == 1


def test_rejected_token_is_refreshed():
    session = FakeSession(
        gets=[FakeResponse(401, text="expired"), FakeResponse(200, {"id": "u1"})],
        posts=[_token("old"), _token("new")],
    )

    _client(session).get_user_profile("u1")

    assert [kwargs["headers"]["Authorization"] for _, kwargs in session.get_calls] == ["Bearer old", "Bearer new"]


def test_missing_credentials():
    session = FakeSession()

    with pytest.raises(SpotifyCredentialsError):
        _client(session, client_id="", client_secret="").get_user_profile("u1")
    assert session.get_calls == []


def test_spotify_generated_probe():
    page = '<meta name="music:song" content="https://open.spotify.com/track/4uLU6hMCjMI75M1A2tKUQC"/>'
    session = FakeSession(gets=[FakeResponse(200, text=page)])

    assert _client(session).is_spotify_generated("gen1") is True
    url, kwargs = session.get_calls[0]
    assert url == "https://open.spotify.test/playlist/gen1"
    assert "Mozilla" in kwargs["headers"]["User-Agent"]


@pytest.mark.parametrize(
    "reply",
    [
        FakeResponse(200, text="<html>no tracks here</html>"),
        FakeResponse(404, text="gone"),
        requests.ConnectionError("offline"),
    ],
)
def test_spotify_generated_probe_negative(reply):
    assert _client(FakeSession(gets=[reply])).is_spotify_generated("x") is False
