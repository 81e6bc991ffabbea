from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal, InvalidOperation, getcontext
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from domain.models import GRAND_TOTAL_KEY


class RawTransaction(BaseModel):
    """
    One record as served by the transactions endpoint, e.g.:

      {"Date": "2013-12-13", "Ledger": "Insurance Expense",
       "Amount": "-117.81", "Company": "LONDON DRUGS 78 POSTAL VANCOUVER BC"}

    Date and Amount are parsed into typed values; Ledger and Company are kept verbatim.
    """

    model_config = ConfigDict(extra="ignore", frozen=True)

    posted_on: date = Field(alias="Date")
    amount: Decimal = Field(alias="Amount")
    ledger: str = Field(default="", alias="Ledger")
    company: str = Field(default="", alias="Company")

    @field_validator("posted_on", mode="before")
    @classmethod
    def coerce_date(cls, value: Any) -> Any:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if not isinstance(value, str):
            raise ValueError(f"expected ISO 8601 date string, got {type(value).__name__}")

        text = value.strip()
        try:
            return date.fromisoformat(text)
        except ValueError:
            pass
        # Timestamps carry more precision than the source has; keep the calendar day only.
        try:
            return datetime.fromisoformat(text).date()
        except ValueError:
            raise ValueError(f"unparseable date {value!r}") from None

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Any:
        if isinstance(value, bool) or not isinstance(value, (str, int, float, Decimal)):
            raise ValueError(f"expected decimal string, got {type(value).__name__}")
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise ValueError(f"unparseable amount {value!r}") from None
        if not amount.is_finite():
            raise ValueError(f"amount must be finite, got {value!r}")
        context = getcontext()
        if len(amount.as_tuple().digits) > context.prec:
            raise ValueError(f"amount {value!r} has more than {context.prec} significant digits")
        if not context.Emin <= amount.adjusted() <= context.Emax:
            raise ValueError(f"amount {value!r} is out of range")
        return amount

    @field_validator("ledger", "company", mode="before")
    @classmethod
    def coerce_text(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("ledger")
    @classmethod
    def reject_reserved_ledger(cls, value: str) -> str:
        if value == GRAND_TOTAL_KEY:
            raise ValueError(f"ledger name {GRAND_TOTAL_KEY!r} is reserved for the grand total")
        return value


class TransactionPage(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    page: int = Field(ge=1, strict=True)
    total_count: int = Field(alias="totalCount", ge=0, strict=True)
    transactions: List[Any] = Field(default_factory=list)


class LedgerRow(BaseModel):
    ledger: str
    expense: Decimal
    revenue: Decimal


class LedgerReport(BaseModel):
    rows: List[LedgerRow] = Field(default_factory=list)
    total_expense: Decimal = Decimal("0")
    total_revenue: Decimal = Decimal("0")
    balance: Decimal = Decimal("0")


class LedgerTotalsResponse(BaseModel):
    totals: Dict[str, Decimal]
    report: LedgerReport
