from dataclasses import dataclass, field
from typing import List


@dataclass
class StreakEntry:
    track_id: str
    streak: int
    days: int
    average_rank: float


@dataclass
class OneAndDoneEntry:
    track_id: str
    rank: int
    days: int = 1


@dataclass
class AverageRankEntry:
    track_id: str
    average_rank: float
    days: int


@dataclass
class PlaylistStats:
    unique_tracks: int = 0
    total_days: int = 0
    unique_number_one_tracks: int = 0
    longest_streak_tracks: List[StreakEntry] = field(default_factory=list)
    one_and_done_tracks: List[OneAndDoneEntry] = field(default_factory=list)
    best_average_rank_tracks: List[AverageRankEntry] = field(default_factory=list)
