"""
Seed holdings loader.
Reads the static portfolio definition from YAML.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml

from dashboard.domain.models import Holding

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "sector", "purchase_price", "qty", "symbol")


def _build_holding(index: int, row: Dict[str, Any]) -> Holding:
    missing = [f for f in REQUIRED_FIELDS if row.get(f) in (None, "")]
    if missing:
        raise ValueError(f"Holding #{index} is missing fields: {', '.join(missing)}")

    purchase_price = float(row["purchase_price"])
    qty = int(row["qty"])
    if qty < 0:
        raise ValueError(f"Holding #{index} has negative qty: {qty}")

    cmp = float(row.get("cmp") or purchase_price)
    return Holding(
        no=int(row.get("no", index)),
        name=str(row["name"]),
        sector=str(row["sector"]),
        purchase_price=purchase_price,
        qty=qty,
        investment=purchase_price * qty,
        symbol=str(row["symbol"]).strip(),
        cmp=cmp,
        present_value=cmp * qty,
        pe_ratio=row.get("pe_ratio"),
        latest_earnings=row.get("latest_earnings"),
        market_cap=row.get("market_cap"),
    )


def parse_holdings(data: Any) -> List[Holding]:
    if isinstance(data, dict):
        data = data.get("holdings")
    if not isinstance(data, list):
        raise ValueError("Portfolio file must contain a 'holdings' list")
    return [_build_holding(i, row) for i, row in enumerate(data, start=1)]


def load_holdings(path: Union[str, Path]) -> List[Holding]:
    """
    Load seed holdings from a YAML file.

    Investment is computed once here and never re-derived afterwards.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    holdings = parse_holdings(data)
    logger.info("Loaded %d holdings from %s", len(holdings), path)
    return holdings
