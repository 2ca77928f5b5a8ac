from typing import List

from sqlalchemy import text

from config.database.session import SessionLocal
from timeline.application.port.history_repository_port import HistoryRepositoryPort
from timeline.application.usecase.timeline_builder import to_utc_date
from timeline.domain.history_record import HistoryRecord
# registers the tables on Base.metadata before init_db_schema runs
from timeline.infrastructure.orm.history_orm import PlaylistTrackHistoryORM, TrackORM  # noqa: F401


class HistoryRepositoryImpl(HistoryRepositoryPort):
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def fetch_history(self, playlist_id: str) -> List[HistoryRecord]:
        """
        History intervals joined with track metadata, ordered by start date.
        Dates are normalized here because raw SQL on some drivers (SQLite) returns them as text.
        Ties on start date keep a stable order by row id so repeated calls give identical timelines.
        """
        with self.session_factory() as db:
            rows = db.execute(
                text(
                    """
                    SELECT
                        h.track_spotify_id,
                        h.rank,
                        h.start_date,
                        h.end_date,
                        t.track_name,
                        t.artist_name,
                        t.album_art_uri
                    FROM playlist_tracks_history h
                    JOIN tracks t ON h.track_spotify_id = t.track_spotify_id
                    WHERE h.playlist_spotify_id = :playlist_id
                    ORDER BY h.start_date, h.id
                    """
                ),
                {"playlist_id": playlist_id},
            ).mappings().all()

        return [
            HistoryRecord(
                track_id=row["track_spotify_id"],
                rank=row["rank"],
                start_date=to_utc_date(row["start_date"]),
                end_date=to_utc_date(row["end_date"]),
                track_name=row["track_name"],
                artist_name=row["artist_name"],
                album_art_url=row["album_art_uri"],
            )
            for row in rows
        ]
