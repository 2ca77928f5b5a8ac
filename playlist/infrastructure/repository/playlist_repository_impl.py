from typing import List

from sqlalchemy.exc import IntegrityError

from config.database.session import SessionLocal
from playlist.application.port.playlist_repository_port import PlaylistRepositoryPort
from playlist.domain.exceptions import PlaylistAlreadyTrackedError
from playlist.domain.playlist import Playlist
from playlist.infrastructure.orm.playlist_orm import PlaylistORM


class PlaylistRepositoryImpl(PlaylistRepositoryPort):
    def __init__(self, session_factory=SessionLocal):
        self.session_factory = session_factory

    def list_all(self) -> List[Playlist]:
        with self.session_factory() as db:
            orm_playlists = db.query(PlaylistORM).order_by(PlaylistORM.playlist_name.asc()).all()
            return [self._to_domain(o) for o in orm_playlists]

    def count(self) -> int:
        with self.session_factory() as db:
            return db.query(PlaylistORM).count()

    def exists(self, playlist_id: str) -> bool:
        with self.session_factory() as db:
            return db.get(PlaylistORM, playlist_id) is not None

    def save(self, playlist: Playlist) -> Playlist:
        with self.session_factory() as db:
            orm = PlaylistORM(
                playlist_spotify_id=playlist.playlist_id,
                playlist_name=playlist.name,
                playlist_owner_spotify_id=playlist.owner_id,
                playlist_owner_display_name=playlist.owner_display_name,
                playlist_art_uri=playlist.art_url,
                is_ordered=playlist.is_ordered,
                is_spotify_generated=playlist.is_spotify_generated,
                created_at=playlist.created_at,
            )
            db.add(orm)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise PlaylistAlreadyTrackedError("This playlist is already being tracked.") from exc
            db.refresh(orm)
            return self._to_domain(orm)

    @staticmethod
    def _to_domain(orm: PlaylistORM) -> Playlist:
        return Playlist(
            playlist_id=orm.playlist_spotify_id,
            name=orm.playlist_name,
            owner_id=orm.playlist_owner_spotify_id,
            owner_display_name=orm.playlist_owner_display_name,
            art_url=orm.playlist_art_uri,
            is_ordered=bool(orm.is_ordered),
            is_spotify_generated=bool(orm.is_spotify_generated),
            created_at=orm.created_at,
        )
