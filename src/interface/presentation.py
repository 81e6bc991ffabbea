from __future__ import annotations

from decimal import Decimal
from html import escape
from typing import Mapping

from domain.models import GRAND_TOTAL_KEY
from domain.schemas import LedgerReport, LedgerRow

_CENTS = Decimal("0.01")


def format_currency(amount: Decimal) -> str:
    """Two-decimal amount, or an empty string for zero so table cells stay blank."""
    if amount == 0:
        return ""
    return f"{amount.quantize(_CENTS):.2f}"


def build_report(totals: Mapping[str, Decimal]) -> LedgerReport:
    rows: list[LedgerRow] = []
    total_expense = Decimal("0")
    total_revenue = Decimal("0")
    for ledger in sorted(totals):
        if ledger == GRAND_TOTAL_KEY:
            continue
        amount = totals[ledger]
        expense = -amount if amount < 0 else Decimal("0")
        revenue = amount if amount >= 0 else Decimal("0")
        total_expense += expense
        total_revenue += revenue
        rows.append(LedgerRow(ledger=ledger, expense=expense, revenue=revenue))

    return LedgerReport(
        rows=rows,
        total_expense=total_expense,
        total_revenue=total_revenue,
        balance=totals.get(GRAND_TOTAL_KEY, Decimal("0")),
    )


def render_text(report: LedgerReport) -> str:
    width = max([len("Ledger"), len("TOTAL")] + [len(row.ledger) for row in report.rows])
    line = f"{{:<{width}}}  {{:>14}}  {{:>14}}"
    out = [line.format("Ledger", "Expense", "Revenue"), "-" * (width + 32)]
    for row in report.rows:
        out.append(line.format(row.ledger, format_currency(row.expense), format_currency(row.revenue)))
    out.append("-" * (width + 32))
    out.append(line.format("TOTAL", format_currency(report.total_expense), format_currency(report.total_revenue)))
    out.append("")
    out.append(f"Total balance: {format_currency(report.balance)}")
    return "\n".join(out)


def _html_row(ledger: str, expense: Decimal, revenue: Decimal) -> str:
    return (
        f'<tr><td class="ledger">{escape(ledger)}</td>'
        f'<td class="expense">{format_currency(expense)}</td>'
        f'<td class="revenue">{format_currency(revenue)}</td></tr>'
    )


def render_html(report: LedgerReport) -> str:
    body = "\n".join(_html_row(row.ledger, row.expense, row.revenue) for row in report.rows)
    footer = _html_row("TOTAL", report.total_expense, report.total_revenue)
    return f"""
<!doctype html>
<html>
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Ledger Totals</title>
    <style>
      body {{ font-family: sans-serif; margin: 2rem; max-width: 900px; }}
      table {{ border-collapse: collapse; width: 100%; }}
      td, th {{ padding: .4rem .6rem; border-bottom: 1px solid #ddd; }}
      td.expense, td.revenue {{ text-align: right; font-variant-numeric: tabular-nums; }}
      tfoot td {{ font-weight: 600; }}
    </style>
  </head>
  <body>
    <h1>Ledger Totals</h1>
    <table id="totals">
      <thead><tr><th>Ledger</th><th>Expense</th><th>Revenue</th></tr></thead>
      <tbody>
{body}
      </tbody>
      <tfoot>
{footer}
      </tfoot>
    </table>
    <p id="balance">Total balance: {format_currency(report.balance)}</p>
  </body>
</html>
"""
