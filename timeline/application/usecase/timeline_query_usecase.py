from datetime import date
from typing import Callable

from config.logger import get_logger
from timeline.application.port.history_repository_port import HistoryRepositoryPort
from timeline.application.usecase.timeline_builder import TimelineBuilder, utc_today
from timeline.domain.timeline import Timeline

logger = get_logger(__name__)


class TimelineQueryUseCase:
    def __init__(
        self,
        repository: HistoryRepositoryPort,
        builder: TimelineBuilder | None = None,
        clock: Callable[[], date] = utc_today,
    ):
        # loads history from the store and hands it to the pure builder
        self.repository = repository
        self.builder = builder or TimelineBuilder()
        self.clock = clock

    def get_timeline(self, playlist_id: str) -> Timeline:
        records = self.repository.fetch_history(playlist_id)
        timeline = self.builder.build(playlist_id, records, today=self.clock())
        logger.info(
            "Timeline built for playlist=%s | records=%d snapshots=%d",
            playlist_id,
            len(records),
            len(timeline.snapshots),
        )
        return timeline
