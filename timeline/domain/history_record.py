from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class HistoryRecord:
    """
    One occupancy interval of a track in a playlist, joined with the track's static metadata.
    end_date is the day the track was removed; the track is not present on that day.
    """
    track_id: str
    rank: int
    start_date: date
    end_date: Optional[date] = None
    track_name: Optional[str] = None
    artist_name: Optional[str] = None
    album_art_url: Optional[str] = None
