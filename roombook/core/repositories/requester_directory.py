from __future__ import annotations

from abc import ABC, abstractmethod

from roombook.core.entities.requester import Requester


class RequesterDirectory(ABC):
    @abstractmethod
    def get(self, requester_id: int) -> Requester | None:
        raise NotImplementedError

    @abstractmethod
    def list_all(self) -> list[Requester]:
        raise NotImplementedError

    @abstractmethod
    def add(self, requester: Requester) -> Requester:
        """Insert a requester and return it with its assigned id."""
        raise NotImplementedError

    @abstractmethod
    def update(self, requester: Requester) -> None:
        raise NotImplementedError
