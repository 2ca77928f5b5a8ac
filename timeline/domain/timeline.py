from dataclasses import dataclass, field
from typing import Dict, List

from timeline.domain.daily_snapshot import DailySnapshot
from timeline.domain.playlist_stats import PlaylistStats
from timeline.domain.track_definition import TrackDefinition


@dataclass
class Timeline:
    playlist_id: str
    stats: PlaylistStats = field(default_factory=PlaylistStats)
    track_definitions: Dict[str, TrackDefinition] = field(default_factory=dict)
    snapshots: List[DailySnapshot] = field(default_factory=list)
