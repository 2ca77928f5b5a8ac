from dataclasses import dataclass
from typing import Optional


@dataclass
class TrackStat:
    """
    Per-track accumulator filled while walking the snapshot sequence.
    Day counts are day-equivalents: each snapshot weighs as many days as it lasts.
    """
    track_id: str
    presence_days: int = 0
    rank_weighted_sum: int = 0
    max_streak_days: int = 0
    current_streak_days: int = 0
    reached_rank_1: bool = False
    first_rank: Optional[int] = None

    @property
    def average_rank(self) -> float:
        if not self.presence_days:
            return 0.0
        return self.rank_weighted_sum / self.presence_days

    def record_presence(self, rank: int, duration: int) -> None:
        if self.first_rank is None:
            self.first_rank = rank
        self.presence_days += duration
        self.rank_weighted_sum += rank * duration
        self.current_streak_days += duration
        if rank == 1:
            self.reached_rank_1 = True

    def close_streak(self) -> None:
        self.max_streak_days = max(self.max_streak_days, self.current_streak_days)
        self.current_streak_days = 0
