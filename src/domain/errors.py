from __future__ import annotations


class LedgerTotalsError(RuntimeError):
    """Base error for a failed totals run."""

    kind = "error"


class ProtocolError(LedgerTotalsError):
    """Page response does not match the expected shape."""

    kind = "protocol"


class TransportError(LedgerTotalsError):
    """Network, timeout or decode failure reported by a transaction source."""

    kind = "transport"


class NormalizationError(LedgerTotalsError):
    """A raw record could not be turned into a Transaction."""

    kind = "normalization"


class AggregationError(LedgerTotalsError):
    """Totals could not be summed exactly."""

    kind = "aggregation"
