from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum

# Reserved bucket holding the sum of every category.
GRAND_TOTAL_KEY = "*"
UNKNOWN_CATEGORY = "Unknown"

# Canonical ordering used to make duplicates adjacent.
CANONICAL_FIELDS: tuple[str, ...] = ("posted_on", "category", "counterparty", "amount")


class AmountPolicy(str, Enum):
    DECIMAL = "decimal"
    TRUNCATE = "truncate"


class AccumulatorState(str, Enum):
    FETCHING = "fetching"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class Transaction:
    posted_on: date
    category: str
    amount: Decimal
    counterparty: str
