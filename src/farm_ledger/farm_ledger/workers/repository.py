from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Worker


class WorkerRepository(Protocol):
    """Repository interface for workers.

    Note (DIP): services depend on this interface, never on a concrete DB.
    """

    def list_all(self, *, include_deleted: bool = False) -> Sequence[Worker]:
        raise NotImplementedError

    def get_by_id(self, worker_id: str) -> Optional[Worker]:
        raise NotImplementedError
