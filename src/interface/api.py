from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse

from application.engine import LedgerTotalsEngine
from domain.errors import LedgerTotalsError
from domain.schemas import LedgerTotalsResponse
from interface.cli import build_engine
from interface.presentation import build_report, render_html

logger = logging.getLogger(__name__)

app = FastAPI(title="Ledger Totals API")


def get_engine() -> LedgerTotalsEngine:
    try:
        return build_engine()
    except ValueError as exc:
        logger.exception("Ledger totals settings are invalid")
        raise HTTPException(status_code=500, detail={"kind": "config", "message": str(exc)}) from exc


def compute_totals(engine: LedgerTotalsEngine) -> LedgerTotalsResponse:
    try:
        totals = engine.run()
    except LedgerTotalsError as exc:
        logger.exception("Ledger totals run failed kind=%s", exc.kind)
        raise HTTPException(status_code=502, detail={"kind": exc.kind, "message": str(exc)}) from exc
    return LedgerTotalsResponse(totals=totals, report=build_report(totals))


@app.get("/", response_class=HTMLResponse)
def index(engine: LedgerTotalsEngine = Depends(get_engine)) -> str:
    return render_html(compute_totals(engine).report)


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/totals", response_model=LedgerTotalsResponse)
def totals(engine: LedgerTotalsEngine = Depends(get_engine)) -> LedgerTotalsResponse:
    return compute_totals(engine)
