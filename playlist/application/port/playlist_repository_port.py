from abc import ABC, abstractmethod
from typing import List

from playlist.domain.playlist import Playlist


class PlaylistRepositoryPort(ABC):

    @abstractmethod
    def list_all(self) -> List[Playlist]:
        pass

    @abstractmethod
    def count(self) -> int:
        pass

    @abstractmethod
    def exists(self, playlist_id: str) -> bool:
        pass

    @abstractmethod
    def save(self, playlist: Playlist) -> Playlist:
        pass
