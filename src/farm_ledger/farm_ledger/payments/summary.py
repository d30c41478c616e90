from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from ..common.validators import as_amount
from ..core.enums import PaymentFor
from .model import Payment


@dataclass(frozen=True)
class PaymentSummary:
    month: str
    total: float = 0.0
    labour: float = 0.0
    expense: float = 0.0


def summarize_payments(payments: Sequence[Payment], month: str) -> PaymentSummary:
    labour = 0.0
    expense = 0.0
    for payment in payments:
        if payment.deleted or payment.accounting_month != month:
            continue
        if payment.payment_for == PaymentFor.EXPENSE:
            expense += as_amount(payment.amount)
        else:
            labour += as_amount(payment.amount)
    return PaymentSummary(month=month, total=labour + expense, labour=labour, expense=expense)
