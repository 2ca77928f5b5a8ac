import os
from datetime import date

# must be set before config.database.session is imported anywhere
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ.setdefault("SPOTIFY_CLIENT_ID", "")
os.environ.setdefault("SPOTIFY_CLIENT_SECRET", "")

import pytest

from config.database.session import Base, SessionLocal, engine
from playlist.infrastructure.orm.playlist_orm import PlaylistORM  # noqa: F401
from timeline.domain.history_record import HistoryRecord
from timeline.infrastructure.orm.history_orm import PlaylistTrackHistoryORM, TrackORM  # noqa: F401


@pytest.fixture
def session_factory():
    """Fresh in-memory schema per test."""
    Base.metadata.create_all(bind=engine)
    try:
        yield SessionLocal
    finally:
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def record():
    """Shorthand factory for history records: record("A", 1, "2024-01-01", "2024-01-05")."""

    def _make(track_id, rank, start, end=None, name=None):
        return HistoryRecord(
            track_id=track_id,
            rank=rank,
            start_date=date.fromisoformat(start),
            end_date=date.fromisoformat(end) if end else None,
            track_name=name or f"Track {track_id}",
            artist_name=f"Artist {track_id}",
            album_art_url=f"https://i.scdn.co/image/{track_id}",
        )

    return _make
