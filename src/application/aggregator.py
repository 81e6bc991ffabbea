from __future__ import annotations

from collections import defaultdict
from decimal import Decimal, DecimalException, Inexact, localcontext
from typing import Iterable

from domain.errors import AggregationError
from domain.models import GRAND_TOTAL_KEY, UNKNOWN_CATEGORY, Transaction


def _is_blank(value: str | None) -> bool:
    return value is None or value.strip() == ""


def calculate_ledger_totals(transactions: Iterable[Transaction]) -> dict[str, Decimal]:
    """
    Sum amounts per category, plus every amount under GRAND_TOTAL_KEY.

    Sums must be exact: a total that would overflow or need rounding raises AggregationError.
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    totals[GRAND_TOTAL_KEY] = Decimal("0")
    with localcontext() as ctx:
        ctx.traps[Inexact] = True
        for txn in transactions:
            category = UNKNOWN_CATEGORY if _is_blank(txn.category) else txn.category
            try:
                totals[GRAND_TOTAL_KEY] += txn.amount
                totals[category] += txn.amount
            except DecimalException as exc:
                raise AggregationError(
                    f"cannot add {txn.amount} to ledger {category!r} exactly: {exc.__class__.__name__}"
                ) from exc
    return dict(totals)
