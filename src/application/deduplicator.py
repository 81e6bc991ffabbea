from __future__ import annotations

from typing import Any, Iterable, Sequence

from domain.models import CANONICAL_FIELDS, Transaction


def _key_fields(fields: Sequence[str]) -> tuple[str, ...]:
    selected = tuple(fields)
    if not selected:
        raise ValueError("key_fields must name at least one field")
    unknown = [name for name in selected if name not in CANONICAL_FIELDS]
    if unknown:
        raise ValueError(f"unknown key fields {unknown}; expected a subset of {list(CANONICAL_FIELDS)}")
    # Selected fields lead the sort so that records equal on them end up adjacent.
    leading = tuple(name for name in CANONICAL_FIELDS if name in selected)
    return leading + tuple(name for name in CANONICAL_FIELDS if name not in selected)


def _values(txn: Transaction, fields: Sequence[str]) -> tuple[Any, ...]:
    return tuple(getattr(txn, name) for name in fields)


def sort_transactions(
    transactions: Iterable[Transaction],
    key_fields: Sequence[str] = CANONICAL_FIELDS,
) -> list[Transaction]:
    order = _key_fields(key_fields)
    # Equal amounts written differently ("-5" vs "-5.00") still sort in a fixed order.
    return sorted(transactions, key=lambda txn: _values(txn, order) + (txn.amount.as_tuple(),))


def deduplicate_transactions(
    transactions: Iterable[Transaction],
    key_fields: Sequence[str] = CANONICAL_FIELDS,
) -> list[Transaction]:
    """
    Sort, then drop records equal to the previously kept one on `key_fields`.

    Only adjacent matches are compared, so this relies on the sort. Two genuinely
    separate purchases that agree on every key field are collapsed as well; that
    is accepted rather than flagged.
    """
    compare = tuple(key_fields)
    deduplicated: list[Transaction] = []
    current: tuple[Any, ...] | None = None
    for txn in sort_transactions(transactions, compare):
        values = _values(txn, compare)
        if values != current:
            deduplicated.append(txn)
            current = values
    return deduplicated
