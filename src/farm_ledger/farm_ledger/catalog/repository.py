from __future__ import annotations

from typing import Protocol, Sequence

from .model import Activity, Area, ExpenseCategory


class CatalogRepository(Protocol):
    """Activities, areas and expense categories (lookup master data)."""

    def list_activities(self) -> Sequence[Activity]:
        raise NotImplementedError

    def list_areas(self) -> Sequence[Area]:
        raise NotImplementedError

    def list_expense_categories(self) -> Sequence[ExpenseCategory]:
        raise NotImplementedError
