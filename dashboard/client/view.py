"""
Plain-text rendering of a portfolio snapshot.
"""

from typing import List, Optional, Sequence

from dashboard.client.formatters import format_currency, format_number, format_percent
from dashboard.domain.models import Holding, PortfolioSnapshot, SectorSummary

COLUMNS = (
    ("No", 4, "<"),
    ("Particulars", 22, "<"),
    ("Purchase Price", 15, ">"),
    ("Qty", 6, ">"),
    ("Investment", 13, ">"),
    ("Portfolio (%)", 14, ">"),
    ("NSE/BSE", 13, "<"),
    ("CMP", 10, ">"),
    ("Present Value", 14, ">"),
    ("Gain/Loss", 12, ">"),
    ("Gain/Loss (%)", 14, ">"),
    ("P/E Ratio", 10, ">"),
    ("Latest Earnings", 16, "<"),
)


def _row(cells: Sequence[str]) -> str:
    return " ".join(
        f"{str(cell)[:width]:{align}{width}}"
        for cell, (_, width, align) in zip(cells, COLUMNS)
    ).rstrip()


def _holding_row(holding: Holding) -> str:
    return _row([
        holding.no,
        holding.name,
        format_number(holding.purchase_price),
        holding.qty,
        format_currency(holding.investment),
        format_number(holding.portfolio_percent),
        holding.symbol,
        format_number(holding.cmp),
        format_currency(holding.present_value),
        format_currency(holding.gain_loss),
        format_percent(holding.gain_loss_percent),
        format_number(holding.pe_ratio) if holding.pe_ratio is not None else "-",
        holding.latest_earnings or "-",
    ])


def _sector_row(summary: SectorSummary) -> str:
    return _row([
        "",
        f"[{summary.sector}]",
        "",
        "",
        format_currency(summary.total_investment),
        format_number(summary.portfolio_percent),
        "",
        "",
        format_currency(summary.total_present_value),
        format_currency(summary.total_gain_loss),
        format_percent(summary.total_gain_loss_percent),
    ])


def render_portfolio(
    snapshot: PortfolioSnapshot,
    error: Optional[str] = None,
    loading: bool = False,
) -> str:
    lines: List[str] = []
    if error:
        lines.append(f"! {error}")
    if loading:
        lines.append("Updating stock prices...")

    header = _row([name for name, _, _ in COLUMNS])
    lines.append(header)
    lines.append("-" * len(header))

    for summary in snapshot.sectors:
        lines.append(_sector_row(summary))
        lines.extend(_holding_row(h) for h in summary.holdings)

    lines.append("-" * len(header))
    lines.append(
        f"Total investment {format_currency(snapshot.total_investment)} | "
        f"Present value {format_currency(snapshot.total_present_value)} | "
        f"Gain/Loss {format_currency(snapshot.total_gain_loss)} "
        f"({format_percent(snapshot.total_gain_loss_percent)})"
    )
    return "\n".join(lines)
