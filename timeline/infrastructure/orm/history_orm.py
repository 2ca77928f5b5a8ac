from sqlalchemy import Column, Date, ForeignKey, Index, Integer, String, BigInteger

from config.database.session import Base


class TrackORM(Base):
    __tablename__ = "tracks"

    track_spotify_id = Column(String(100), primary_key=True)
    track_name = Column(String(500))
    artist_name = Column(String(500))
    album_art_uri = Column(String(500))


class PlaylistTrackHistoryORM(Base):
    __tablename__ = "playlist_tracks_history"
    __table_args__ = (
        Index("ix_playlist_tracks_history_playlist_start", "playlist_spotify_id", "start_date"),
    )

    id = Column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    playlist_spotify_id = Column(String(100), nullable=False)
    track_spotify_id = Column(String(100), ForeignKey("tracks.track_spotify_id"), nullable=False)
    rank = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    # day the track was removed; NULL while it is still in the playlist
    end_date = Column(Date)
