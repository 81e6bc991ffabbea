from __future__ import annotations

import json
import logging
import os
import socket
import time
import urllib.error
import urllib.request
from typing import Any

from domain.errors import TransportError
from infrastructure.transaction_sources.provider import TransactionSource

logger = logging.getLogger(__name__)


class RestTransactionSource(TransactionSource):
    """Reads `{base_url}/transactions/{page}.json` over plain HTTP GET."""

    name = "rest"

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        self.base_url = (base_url or os.getenv("LEDGER_API_BASE_URL", "http://resttest.bench.co")).rstrip("/")
        self.timeout_seconds = timeout_seconds or float(os.getenv("LEDGER_API_TIMEOUT_SECONDS", "30"))

    def page_url(self, page_number: int) -> str:
        return f"{self.base_url}/transactions/{page_number}.json"

    def fetch_page(self, page_number: int) -> Any:
        url = self.page_url(page_number)
        req = urllib.request.Request(
            url=url,
            headers={"Accept": "application/json"},
            method="GET",
        )
        started = time.perf_counter()
        logger.info("RestTransactionSource request start url=%s timeout=%.1fs", url, self.timeout_seconds)
        try:
            with urllib.request.urlopen(req, timeout=self.timeout_seconds) as resp:
                raw = resp.read()
        except urllib.error.HTTPError as exc:
            raise TransportError(f"GET {url} failed with HTTP {exc.code}: {exc.reason}") from exc
        except (socket.timeout, TimeoutError) as exc:
            raise TransportError(f"GET {url} timed out after {self.timeout_seconds:.1f}s") from exc
        except urllib.error.URLError as exc:
            raise TransportError(f"GET {url} failed: {exc.reason}") from exc

        try:
            body = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TransportError(f"GET {url} returned a body that is not JSON: {exc}") from exc

        logger.info(
            "RestTransactionSource request complete url=%s in %.2fs bytes=%d",
            url,
            time.perf_counter() - started,
            len(raw),
        )
        return body
