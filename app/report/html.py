# app/report/html.py
from __future__ import annotations

from typing import Any, Dict, List

from app.report.formatting import display_number, display_text, format_inr

DOCUMENT_TITLE = "Blue Sparrow Plan"
BRAND_HEADING = "Blue Sparrow Capital — Plan Summary"

FUND_COLUMNS = [
    "#", "Fund", "Alloc %", "Why picked",
    "NAV", "1Y", "3Y", "5Y",
    "AUM (₹Cr)", "Expense", "Risk",
]

# optional per-fund metrics shown as "-" when missing
FUND_METRIC_KEYS = ["nav", "cagr_1y", "cagr_3y", "cagr_5y", "aum_cr", "expense", "riskometer"]

_STYLES = """
        body{font-family: ui-sans-serif,system-ui,-apple-system,Segoe UI,Roboto; color:#0f172a; margin:16px;}
        .muted{color:#64748b}
        .title{font-weight:800; font-size:22px}
        .grid{display:grid; grid-template-columns:repeat(3,1fr); gap:10px; margin:12px 0}
        .card{border:1px solid #e2e8f0; border-radius:12px; padding:10px}
        .k{font-size:12px; color:#64748b}
        .v{font-size:16px; font-weight:700}
        .notes{font-weight:600; font-size:13px}
        table{width:100%; border-collapse:collapse; margin-top:14px; font-size:12px}
        th,td{border:1px solid #e2e8f0; padding:6px 8px; vertical-align:top}
        th{background:#f8fafc; text-align:left}
        .sub{color:#64748b; font-size:11px; margin-top:2px}
        .footer{margin-top:16px; font-size:11px; color:#64748b}
        .brand{display:flex; align-items:center; justify-content:space-between; margin-bottom:8px}
        .mix{font-size:13px}
        .badge{display:inline-block; padding:2px 8px; border-radius:9999px; background:#eef2ff; color:#1e40af; font-size:11px}
        h3{margin-top:14px}
"""


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _fund_row(idx: int, fund: Dict[str, Any]) -> str:
    metrics = "".join(
        f"<td>{display_text(fund.get(key), '-')}</td>" for key in FUND_METRIC_KEYS
    )
    return (
        "\n      <tr>"
        f"<td>{idx}</td>"
        f"<td><strong>{display_text(fund.get('scheme'))}</strong>"
        f"<div class=\"sub\">{display_text(fund.get('category'))}</div></td>"
        f"<td>{display_number(fund.get('allocation_pct'))}%</td>"
        f"<td>{display_text(fund.get('why'))}</td>"
        f"{metrics}"
        "</tr>"
    )


def render_fund_rows(funds: Any) -> str:
    rows = [
        _fund_row(idx, _as_dict(fund))
        for idx, fund in enumerate(_as_list(funds), start=1)
    ]
    return "".join(rows)


def render_plan_html(plan: Dict[str, Any]) -> str:
    """Build the printable, self-contained HTML page for a plan document.

    Pure function: no I/O, same input gives the same bytes. Every value taken
    from the plan is HTML-escaped and missing fields render as placeholders.
    """
    plan = _as_dict(plan)
    summary = _as_dict(plan.get("summary"))
    guardrails = _as_dict(plan.get("guardrails"))

    mix = (
        f"{display_number(summary.get('equity_pct'))}% Eq • "
        f"{display_number(summary.get('stability_pct'))}% Stab • "
        f"{display_number(summary.get('liquid_pct'))}% Liqu"
    )
    header_cells = "".join(f"<th>{col}</th>" for col in FUND_COLUMNS)

    return f"""<!DOCTYPE html>
<html>
  <head>
    <meta charset="utf-8" />
    <title>{DOCUMENT_TITLE}</title>
    <style>{_STYLES}    </style>
  </head>
  <body>
    <div class="brand">
      <div>
        <div class="title">{BRAND_HEADING}</div>
        <div class="muted">{display_text(summary.get('title'))}</div>
      </div>
      <div class="badge">Shareable PDF</div>
    </div>

    <div class="grid">
      <div class="card"><div class="k">Corpus</div><div class="v">{format_inr(summary.get('corpus_inr'))}</div></div>
      <div class="card"><div class="k">Monthly SWP</div><div class="v">{format_inr(summary.get('monthly_swp_inr'))}</div></div>
      <div class="card"><div class="k">Mix</div><div class="v mix">{mix}</div></div>
    </div>

    <div class="card">
      <div class="k">Notes</div>
      <div class="v notes">{display_text(summary.get('notes'))}</div>
    </div>

    <h3>Fund Details &amp; Rationale</h3>
    <table>
      <thead>
        <tr>{header_cells}</tr>
      </thead>
      <tbody>{render_fund_rows(plan.get('funds'))}
      </tbody>
    </table>

    <div class="footer">
      Guardrails: Trim SWP by {display_text(guardrails.get('trim_if_drawdown_gt'), '—')} if 12M return below threshold; step-up {display_text(guardrails.get('stepup_pct'), '—')} if conditions met.
      <br/>{display_text(plan.get('disclaimer'))}
    </div>
  </body>
</html>
"""
