from __future__ import annotations

import logging

from domain.errors import ProtocolError
from domain.models import AccumulatorState, Transaction
from application.normalizer import TransactionNormalizer
from infrastructure.page_fetcher import PageFetcher

logger = logging.getLogger(__name__)


class TransactionAccumulator:
    """
    Pulls pages one at a time until the collected records satisfy the server's totalCount.

    - totalCount is re-read from every page; the latest value wins, since the source
      may gain or lose records while we page through it
    - at least one page is always fetched, since only a page tells us the total
    - a shrinking total can end the loop with records from since-deleted rows still
      in the result; they are not purged
    - any error moves to FAILED and drops everything collected so far
    """

    def __init__(
        self,
        fetcher: PageFetcher,
        normalizer: TransactionNormalizer | None = None,
        max_pages: int | None = None,
    ) -> None:
        if max_pages is not None and max_pages < 1:
            raise ValueError(f"max_pages must be at least 1, got {max_pages}")
        self._fetcher = fetcher
        self._normalizer = normalizer or TransactionNormalizer()
        self._max_pages = max_pages
        self._transactions: list[Transaction] = []
        self.state = AccumulatorState.FETCHING
        self.page_number = 1
        self.expected_total = 0
        self.pages_fetched = 0
        self._started = False

    def has_more_pages(self) -> bool:
        return len(self._transactions) < self.expected_total

    def run(self) -> list[Transaction]:
        if self._started:
            raise RuntimeError("TransactionAccumulator.run() may only be called once")
        self._started = True

        try:
            self._accumulate_page()
            while self.has_more_pages():
                self._accumulate_page()
        except Exception:
            self._fail()
            raise

        self.state = AccumulatorState.DONE
        logger.info(
            "Accumulator done pages=%d transactions=%d expected_total=%d",
            self.pages_fetched,
            len(self._transactions),
            self.expected_total,
        )
        transactions, self._transactions = self._transactions, []
        return transactions

    def _accumulate_page(self) -> None:
        if self._max_pages is not None and self.page_number > self._max_pages:
            raise ProtocolError(
                f"collected {len(self._transactions)} of {self.expected_total} transactions "
                f"within max_pages={self._max_pages}"
            )

        page = self._fetcher.fetch(self.page_number)
        normalized = [self._normalizer.normalize(raw) for raw in page.transactions]

        if page.total_count < self.expected_total:
            logger.warning(
                "Accumulator total_count shrank from %d to %d at page=%d",
                self.expected_total,
                page.total_count,
                self.page_number,
            )
        self.expected_total = page.total_count
        self._transactions.extend(normalized)
        self.pages_fetched += 1
        self.page_number += 1

    def _fail(self) -> None:
        logger.error(
            "Accumulator failed at page=%d after pages=%d; discarding %d transactions",
            self.page_number,
            self.pages_fetched,
            len(self._transactions),
        )
        self.state = AccumulatorState.FAILED
        self._transactions = []
