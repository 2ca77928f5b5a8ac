from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String

from config.database.session import Base


class PlaylistORM(Base):
    __tablename__ = "playlists"

    playlist_spotify_id = Column(String(100), primary_key=True)
    playlist_name = Column(String(500))
    playlist_owner_spotify_id = Column(String(100))
    playlist_owner_display_name = Column(String(255))
    playlist_art_uri = Column(String(500))
    is_ordered = Column(Boolean, default=False, nullable=False)
    is_spotify_generated = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
