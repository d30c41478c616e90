from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Expense


class ExpenseRepository(Protocol):
    def list_expenses(
        self,
        *,
        start: Optional[str] = None,
        end: Optional[str] = None,
        include_deleted: bool = False,
    ) -> Sequence[Expense]:
        """Expenses whose accounting month lies in [start, end]."""

        raise NotImplementedError

    def get_by_id(self, expense_id: str) -> Optional[Expense]:
        raise NotImplementedError
