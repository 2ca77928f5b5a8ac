from datetime import date, datetime, timezone
from typing import Iterable, Optional

from timeline.domain.daily_snapshot import DailySnapshot, TrackSnapshotItem
from timeline.domain.history_record import HistoryRecord
from timeline.domain.playlist_stats import (
    AverageRankEntry,
    OneAndDoneEntry,
    PlaylistStats,
    StreakEntry,
)
from timeline.domain.timeline import Timeline
from timeline.domain.track_definition import TrackDefinition
from timeline.domain.track_stat import TrackStat

LEADERBOARD_SIZE = 5
BEST_AVERAGE_MIN_DAYS = 3
# the last snapshot has no successor to measure against, so it counts as a single day.
# A track that first appears on today's date therefore lists as one-and-done until the next event.
FINAL_SNAPSHOT_DAYS = 1


def to_utc_date(value) -> Optional[date]:
    """
    Reduce a date, datetime or ISO string to a UTC calendar date.
    Aware datetimes are converted to UTC first; naive ones are taken as UTC.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 10:
            return to_utc_date(datetime.fromisoformat(text.replace("Z", "+00:00")))
        return date.fromisoformat(text)
    raise TypeError(f"Unsupported date value: {value!r}")


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


class TimelineBuilder:
    """
    Derives the rank timeline of a playlist from its track history.

    Snapshots are sparse: one per event date (a start date, an end date, or today)
    rather than one per calendar day, since membership only changes on those dates.
    The builder is pure; today is passed in so results are reproducible.
    """

    def build(
        self,
        playlist_id: str,
        records: Iterable[HistoryRecord],
        today: Optional[date] = None,
    ) -> Timeline:
        records = [self._normalize(record) for record in records]
        if not records:
            return Timeline(playlist_id=playlist_id)

        today = to_utc_date(today) or utc_today()
        track_definitions = self.extract_track_definitions(records)
        event_dates = self.extract_event_dates(records, today)
        snapshots = self.build_snapshots(records, event_dates)
        stats = self.compute_stats(snapshots, track_definitions)
        return Timeline(
            playlist_id=playlist_id,
            stats=stats,
            track_definitions=track_definitions,
            snapshots=snapshots,
        )

    @staticmethod
    def extract_track_definitions(records: list[HistoryRecord]) -> dict[str, TrackDefinition]:
        definitions: dict[str, TrackDefinition] = {}
        for record in records:
            if record.track_id in definitions:
                continue
            definitions[record.track_id] = TrackDefinition(
                id=record.track_id,
                name=record.track_name,
                artist=record.artist_name,
                album_art=record.album_art_url,
            )
        return definitions

    @staticmethod
    def extract_event_dates(records: list[HistoryRecord], today: date) -> list[date]:
        dates = {today}
        for record in records:
            dates.add(record.start_date)
            if record.end_date is not None:
                dates.add(record.end_date)
        return sorted(dates)

    @staticmethod
    def is_present(record: HistoryRecord, on: date) -> bool:
        # end_date is the removal day, so the track is gone on it
        return record.start_date <= on and (record.end_date is None or record.end_date > on)

    @staticmethod
    def is_added(record: HistoryRecord, on: date) -> bool:
        return record.start_date == on

    def build_snapshots(self, records: list[HistoryRecord], event_dates: list[date]) -> list[DailySnapshot]:
        added_on = {(record.track_id, record.start_date) for record in records}
        snapshots: list[DailySnapshot] = []
        prev_rank_map: dict[str, int] = {}

        for current_date in event_dates:
            # sorted() is stable, so equal stored ranks keep their input order
            present = sorted(
                (record for record in records if self.is_present(record, current_date)),
                key=lambda record: record.rank,
            )

            items: list[TrackSnapshotItem] = []
            for position, record in enumerate(present, start=1):
                prev_rank = prev_rank_map.get(record.track_id)
                is_new = prev_rank is None
                items.append(
                    TrackSnapshotItem(
                        id=record.track_id,
                        rank=position,
                        added=(record.track_id, current_date) in added_on,
                        removed=False,
                        rank_change=0 if is_new else prev_rank - position,
                        is_new=is_new,
                    )
                )

            snapshot = DailySnapshot(date=current_date, tracks=items)
            snapshots.append(snapshot)
            prev_rank_map = snapshot.rank_map()

        return snapshots

    def compute_stats(
        self,
        snapshots: list[DailySnapshot],
        track_definitions: dict[str, TrackDefinition],
    ) -> PlaylistStats:
        track_stats = self.accumulate_track_stats(snapshots)

        if snapshots:
            total_days = (snapshots[-1].date - snapshots[0].date).days + 1
        else:
            total_days = 0

        return PlaylistStats(
            unique_tracks=len(track_definitions),
            total_days=total_days,
            unique_number_one_tracks=sum(1 for stat in track_stats.values() if stat.reached_rank_1),
            longest_streak_tracks=self._longest_streaks(track_stats.values()),
            one_and_done_tracks=self._one_and_done(track_stats.values()),
            best_average_rank_tracks=self._best_average_ranks(track_stats.values()),
        )

    @staticmethod
    def snapshot_durations(snapshots: list[DailySnapshot]) -> list[int]:
        """
        Number of days each snapshot stands for: the gap to the next snapshot (at least 1),
        and FINAL_SNAPSHOT_DAYS for the last one.
        """
        durations = []
        for index, snapshot in enumerate(snapshots):
            if index + 1 < len(snapshots):
                durations.append(max(1, (snapshots[index + 1].date - snapshot.date).days))
            else:
                durations.append(FINAL_SNAPSHOT_DAYS)
        return durations

    def accumulate_track_stats(self, snapshots: list[DailySnapshot]) -> dict[str, TrackStat]:
        stats: dict[str, TrackStat] = {}
        previously_present: set[str] = set()

        for snapshot, duration in zip(snapshots, self.snapshot_durations(snapshots)):
            present = {item.id for item in snapshot.tracks}
            for track_id in previously_present - present:
                stats[track_id].close_streak()

            for item in snapshot.tracks:
                stat = stats.setdefault(item.id, TrackStat(track_id=item.id))
                stat.record_presence(item.rank, duration)

            previously_present = present

        for stat in stats.values():
            stat.close_streak()
        return stats

    @staticmethod
    def _longest_streaks(stats: Iterable[TrackStat]) -> list[StreakEntry]:
        ranked = sorted(stats, key=lambda s: (-s.max_streak_days, s.average_rank, s.track_id))
        return [
            StreakEntry(
                track_id=stat.track_id,
                streak=stat.max_streak_days,
                days=stat.presence_days,
                average_rank=stat.average_rank,
            )
            for stat in ranked[:LEADERBOARD_SIZE]
        ]

    @staticmethod
    def _best_average_ranks(stats: Iterable[TrackStat]) -> list[AverageRankEntry]:
        eligible = [stat for stat in stats if stat.presence_days >= BEST_AVERAGE_MIN_DAYS]
        ranked = sorted(eligible, key=lambda s: (s.average_rank, s.track_id))
        return [
            AverageRankEntry(track_id=stat.track_id, average_rank=stat.average_rank, days=stat.presence_days)
            for stat in ranked[:LEADERBOARD_SIZE]
        ]

    @staticmethod
    def _one_and_done(stats: Iterable[TrackStat]) -> list[OneAndDoneEntry]:
        singles = [stat for stat in stats if stat.presence_days == 1]
        ranked = sorted(singles, key=lambda s: (s.first_rank, s.track_id))
        return [
            OneAndDoneEntry(track_id=stat.track_id, rank=stat.first_rank, days=stat.presence_days)
            for stat in ranked[:LEADERBOARD_SIZE]
        ]

    @staticmethod
    def _normalize(record: HistoryRecord) -> HistoryRecord:
        return HistoryRecord(
            track_id=record.track_id,
            rank=int(record.rank),
            start_date=to_utc_date(record.start_date),
            end_date=to_utc_date(record.end_date),
            track_name=record.track_name,
            artist_name=record.artist_name,
            album_art_url=record.album_art_url,
        )
