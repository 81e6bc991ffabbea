from __future__ import annotations

import os
from typing import Optional, Tuple

from pydantic import BaseModel, Field, ValidationError, field_validator

from domain.models import CANONICAL_FIELDS, AmountPolicy


class LedgerSettings(BaseModel):
    base_url: str = "http://resttest.bench.co"
    timeout_seconds: float = Field(default=30.0, gt=0)
    amount_policy: AmountPolicy = AmountPolicy.DECIMAL
    dedup_fields: Tuple[str, ...] = CANONICAL_FIELDS
    max_pages: Optional[int] = Field(default=None, ge=1)

    @field_validator("dedup_fields", mode="before")
    @classmethod
    def split_fields(cls, value):
        if isinstance(value, str):
            return tuple(part.strip() for part in value.split(",") if part.strip())
        return value

    @field_validator("dedup_fields")
    @classmethod
    def known_fields(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        if not value:
            raise ValueError("dedup_fields must name at least one field")
        unknown = [name for name in value if name not in CANONICAL_FIELDS]
        if unknown:
            raise ValueError(f"unknown dedup fields {unknown}; expected a subset of {list(CANONICAL_FIELDS)}")
        return value

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        raw = {
            "base_url": os.getenv("LEDGER_API_BASE_URL"),
            "timeout_seconds": os.getenv("LEDGER_API_TIMEOUT_SECONDS"),
            "amount_policy": (os.getenv("LEDGER_AMOUNT_POLICY") or "").strip().lower() or None,
            "dedup_fields": os.getenv("LEDGER_DEDUP_FIELDS"),
            "max_pages": os.getenv("LEDGER_MAX_PAGES"),
        }
        try:
            return cls.model_validate({k: v for k, v in raw.items() if v not in (None, "")})
        except ValidationError as exc:
            raise ValueError(f"Invalid ledger settings: {exc}") from exc
