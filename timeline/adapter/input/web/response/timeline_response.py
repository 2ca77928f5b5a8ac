from timeline.domain.daily_snapshot import DailySnapshot, TrackSnapshotItem
from timeline.domain.playlist_stats import PlaylistStats
from timeline.domain.timeline import Timeline
from timeline.domain.track_definition import TrackDefinition

AVERAGE_RANK_DECIMALS = 2


def _track_definition_to_dict(definition: TrackDefinition) -> dict:
    return {
        "id": definition.id,
        "name": definition.name,
        "artist": definition.artist,
        "albumArt": definition.album_art,
    }


def _snapshot_item_to_dict(item: TrackSnapshotItem) -> dict:
    return {
        "id": item.id,
        "rank": item.rank,
        "added": item.added,
        "removed": item.removed,
        "rankChange": item.rank_change,
        "isNew": item.is_new,
    }


def _snapshot_to_dict(snapshot: DailySnapshot) -> dict:
    return {
        "date": snapshot.date.strftime("%Y-%m-%d"),
        "tracks": [_snapshot_item_to_dict(item) for item in snapshot.tracks],
    }


def _stats_to_dict(stats: PlaylistStats) -> dict:
    return {
        "uniqueTracks": stats.unique_tracks,
        "totalDays": stats.total_days,
        "uniqueNumberOneTracks": stats.unique_number_one_tracks,
        "longestStreakTracks": [
            {
                "trackId": entry.track_id,
                "streak": entry.streak,
                "days": entry.days,
                "averageRank": round(entry.average_rank, AVERAGE_RANK_DECIMALS),
            }
            for entry in stats.longest_streak_tracks
        ],
        "oneAndDoneTracks": [
            {"trackId": entry.track_id, "rank": entry.rank, "days": entry.days}
            for entry in stats.one_and_done_tracks
        ],
        "bestAverageRankTracks": [
            {
                "trackId": entry.track_id,
                "averageRank": round(entry.average_rank, AVERAGE_RANK_DECIMALS),
                "days": entry.days,
            }
            for entry in stats.best_average_rank_tracks
        ],
    }


def timeline_to_dict(timeline: Timeline) -> dict:
    return {
        "playlistId": timeline.playlist_id,
        "stats": _stats_to_dict(timeline.stats),
        "trackDefinitions": {
            track_id: _track_definition_to_dict(definition)
            for track_id, definition in timeline.track_definitions.items()
        },
        "snapshots": [_snapshot_to_dict(snapshot) for snapshot in timeline.snapshots],
    }
