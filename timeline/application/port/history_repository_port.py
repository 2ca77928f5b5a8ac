from abc import ABC, abstractmethod
from typing import List

from timeline.domain.history_record import HistoryRecord


class HistoryRepositoryPort(ABC):
    @abstractmethod
    def fetch_history(self, playlist_id: str) -> List[HistoryRecord]:
        """Return every history interval of the playlist joined with track metadata, ordered by start date."""
        raise NotImplementedError
