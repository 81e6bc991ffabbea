from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import Any, Mapping

from pydantic import ValidationError

from domain.errors import NormalizationError
from domain.models import AmountPolicy, Transaction
from domain.schemas import RawTransaction


class TransactionNormalizer:
    """
    Turns one raw record into a Transaction.

    AmountPolicy.DECIMAL keeps cents; AmountPolicy.TRUNCATE drops them toward zero
    ("-117.81" -> -117), matching an integer parse of the amount string.
    """

    def __init__(self, amount_policy: AmountPolicy = AmountPolicy.DECIMAL) -> None:
        self.amount_policy = AmountPolicy(amount_policy)

    def normalize(self, raw: Any) -> Transaction:
        if not isinstance(raw, Mapping):
            raise NormalizationError(f"expected transaction record to be an object, got {type(raw).__name__}")
        try:
            record = RawTransaction.model_validate(dict(raw))
        except ValidationError as exc:
            raise NormalizationError(f"Invalid transaction record {dict(raw)!r}: {exc}") from exc

        return Transaction(
            posted_on=record.posted_on,
            category=record.ledger,
            amount=self._apply_policy(record.amount),
            counterparty=record.company,
        )

    def _apply_policy(self, amount: Decimal) -> Decimal:
        if self.amount_policy is AmountPolicy.TRUNCATE:
            return amount.to_integral_value(rounding=ROUND_DOWN)
        return amount
