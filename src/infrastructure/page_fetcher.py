from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from domain.errors import ProtocolError, TransportError
from domain.schemas import TransactionPage
from infrastructure.transaction_sources.provider import TransactionSource

logger = logging.getLogger(__name__)


class PageFetcher:
    """
    Fetches one page from a TransactionSource and checks it against the page contract.

    A page must be a JSON object with:
      - `page` equal to the requested page number
      - `totalCount`, a non-negative integer
      - `transactions`, a list of raw records
    Anything else raises ProtocolError; it is never retried.
    """

    def __init__(self, source: TransactionSource) -> None:
        self._source = source

    def fetch(self, page_number: int) -> TransactionPage:
        if page_number < 1:
            raise ValueError(f"page numbers start at 1, got {page_number}")

        try:
            payload = self._source.fetch_page(page_number)
        except TransportError:
            raise
        except Exception as exc:
            raise TransportError(f"{self._source.name} source failed for page {page_number}: {exc}") from exc

        page = self._validate(payload, page_number)
        logger.info(
            "PageFetcher page=%d total_count=%d transactions=%d",
            page.page,
            page.total_count,
            len(page.transactions),
        )
        return page

    def _validate(self, payload: Any, page_number: int) -> TransactionPage:
        if not isinstance(payload, dict):
            raise ProtocolError(f"expected page {page_number} to be an object, got {type(payload).__name__}")
        if "page" not in payload:
            raise ProtocolError(f"expected page number in results for page {page_number}")
        if payload["page"] != page_number or isinstance(payload["page"], bool):
            raise ProtocolError(f"expected page number {page_number} in results, got {payload['page']!r}")
        if "totalCount" not in payload:
            raise ProtocolError(f"expected total count in results for page {page_number}")
        if "transactions" not in payload:
            raise ProtocolError(f"expected transactions in results for page {page_number}")
        if not isinstance(payload["transactions"], list):
            raise ProtocolError(
                f"expected transactions to be a list for page {page_number}, "
                f"got {type(payload['transactions']).__name__}"
            )

        try:
            return TransactionPage.model_validate(payload)
        except ValidationError as exc:
            raise ProtocolError(f"page {page_number} did not match TransactionPage schema: {exc}") from exc
