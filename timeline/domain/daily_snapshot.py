from dataclasses import dataclass, field
from datetime import date
from typing import List


@dataclass
class TrackSnapshotItem:
    id: str
    rank: int
    added: bool = False
    removed: bool = False
    # positive = moved toward #1 since the previous snapshot
    rank_change: int = 0
    is_new: bool = False


@dataclass
class DailySnapshot:
    date: date
    tracks: List[TrackSnapshotItem] = field(default_factory=list)

    def rank_map(self) -> dict[str, int]:
        return {item.id: item.rank for item in self.tracks}
