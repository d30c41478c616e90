from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Payment


class PaymentRepository(Protocol):
    def list_payments(
        self,
        *,
        start: Optional[str] = None,
        end: Optional[str] = None,
        group_id: Optional[str] = None,
        include_deleted: bool = False,
    ) -> Sequence[Payment]:
        raise NotImplementedError
