from __future__ import annotations

import json
import logging
import sys

from application.engine import LedgerTotalsEngine
from domain.errors import LedgerTotalsError
from infrastructure.settings import LedgerSettings
from infrastructure.transaction_sources.rest_provider import RestTransactionSource
from interface.presentation import build_report, render_text

logger = logging.getLogger(__name__)


def build_engine(settings: LedgerSettings | None = None) -> LedgerTotalsEngine:
    settings = settings or LedgerSettings.from_env()
    return LedgerTotalsEngine(
        source=RestTransactionSource(base_url=settings.base_url, timeout_seconds=settings.timeout_seconds),
        amount_policy=settings.amount_policy,
        dedup_fields=settings.dedup_fields,
        max_pages=settings.max_pages,
    )


def main(argv: list[str] | None = None, engine: LedgerTotalsEngine | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    try:
        totals = (engine or build_engine()).run()
    except (LedgerTotalsError, ValueError) as exc:
        logger.exception("Ledger totals run failed")
        kind = getattr(exc, "kind", "config")
        print(f"[ledger-totals] {kind} error: {exc}", file=sys.stderr)
        return 1

    if "--json" in args:
        print(json.dumps({ledger: str(amount) for ledger, amount in totals.items()}, indent=2, sort_keys=True))
    else:
        print(render_text(build_report(totals)))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
