from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class TransactionSource(ABC):
    """Transport contract for a paginated transactions endpoint."""

    name: str = "source"

    @abstractmethod
    def fetch_page(self, page_number: int) -> Any:
        """Return the decoded JSON body for one page, or raise TransportError."""
        raise NotImplementedError
