from __future__ import annotations

import logging
import time
from decimal import Decimal
from typing import Sequence

from application.accumulator import TransactionAccumulator
from application.aggregator import calculate_ledger_totals
from application.deduplicator import deduplicate_transactions
from application.normalizer import TransactionNormalizer
from domain.models import CANONICAL_FIELDS, AmountPolicy
from infrastructure.page_fetcher import PageFetcher
from infrastructure.transaction_sources.provider import TransactionSource

logger = logging.getLogger(__name__)


class LedgerTotalsEngine:
    def __init__(
        self,
        source: TransactionSource,
        amount_policy: AmountPolicy = AmountPolicy.DECIMAL,
        dedup_fields: Sequence[str] = CANONICAL_FIELDS,
        max_pages: int | None = None,
    ):
        self._source = source
        self._normalizer = TransactionNormalizer(amount_policy)
        self._dedup_fields = tuple(dedup_fields)
        self._max_pages = max_pages

    def run(self) -> dict[str, Decimal]:
        logger.info(
            "Engine run start source=%s amount_policy=%s dedup_fields=%s",
            self._source.name,
            self._normalizer.amount_policy.value,
            ",".join(self._dedup_fields),
        )
        t0 = time.perf_counter()

        t = time.perf_counter()
        accumulator = TransactionAccumulator(
            PageFetcher(self._source),
            self._normalizer,
            max_pages=self._max_pages,
        )
        transactions = accumulator.run()
        logger.info(
            "Accumulation complete in %.2fs pages=%d transactions=%d",
            time.perf_counter() - t,
            accumulator.pages_fetched,
            len(transactions),
        )

        t = time.perf_counter()
        unique = deduplicate_transactions(transactions, self._dedup_fields)
        logger.info(
            "Deduplication complete in %.2fs kept=%d dropped=%d",
            time.perf_counter() - t,
            len(unique),
            len(transactions) - len(unique),
        )

        totals = calculate_ledger_totals(unique)
        logger.info("Engine run complete in %.2fs ledgers=%d", time.perf_counter() - t0, len(totals) - 1)
        return totals
