import logging
from typing import Any, Dict, List, Optional, Sequence

from .models import FinancialData

logger = logging.getLogger(__name__)

MULTIPLES = ("ev_ebitda", "ev_sales", "pe")


def _multiple(value: float, base: float) -> Optional[float]:
    """value / base, or None when the base is zero (multiple undefined)."""
    if base == 0:
        return None
    return value / base


def _median(values: List[float]) -> Optional[float]:
    if not values:
        return None
    ordered = sorted(values)
    mid = len(ordered) // 2
    if len(ordered) % 2:
        return ordered[mid]
    return (ordered[mid - 1] + ordered[mid]) / 2


def peer_multiples(record: FinancialData) -> Dict[str, Optional[float]]:
    """EV/EBITDA, EV/Sales and P/E for one company; None when a denominator is zero."""
    enterprise_value = record.market_cap + record.total_debt - record.cash
    ebitda = record.ebit + record.depreciation
    return {
        "ev_ebitda": _multiple(enterprise_value, ebitda),
        "ev_sales": _multiple(enterprise_value, record.revenue),
        "pe": _multiple(record.market_cap, record.net_income),
    }


def _implied_from_multiple(method: str, multiple: float, subject: FinancialData) -> Dict[str, Any]:
    net_debt = subject.total_debt - subject.cash
    if method == "ev_ebitda":
        enterprise_value = multiple * (subject.ebit + subject.depreciation)
        equity_value = enterprise_value - net_debt
    elif method == "ev_sales":
        enterprise_value = multiple * subject.revenue
        equity_value = enterprise_value - net_debt
    elif method == "pe":
        equity_value = multiple * subject.net_income
        enterprise_value = equity_value + net_debt
    else:
        raise ValueError(f"Unknown multiple: {method!r}")
    return {
        "method": method,
        "multiple": multiple,
        "enterprise_value": enterprise_value,
        "equity_value": equity_value,
        "implied_price": _multiple(equity_value, subject.shares_outstanding),
    }


def build_comps(subject: FinancialData, peers: Sequence[FinancialData]) -> Dict[str, Any]:
    """
    Comparable-company analysis for one subject against a peer set.

    - Computes each peer's multiples, skipping the subject itself.
    - Takes the median of every multiple over the peers where it is defined.
    - Applies each median to the subject's fundamentals (EV methods bridge
      to equity with debt and cash, P/E the other way).
    - Averages the implied per-share prices into a blended value and upside.
    """
    rows: List[Dict[str, Any]] = []
    for peer in peers:
        if peer.symbol and peer.symbol == subject.symbol:
            continue
        rows.append({"symbol": peer.symbol, "company_name": peer.company_name, **peer_multiples(peer)})

    medians: Dict[str, Optional[float]] = {}
    for name in MULTIPLES:
        medians[name] = _median([row[name] for row in rows if row[name] is not None])

    valuations: List[Dict[str, Any]] = []
    for name in MULTIPLES:
        multiple = medians[name]
        if multiple is None:
            continue
        valuations.append(_implied_from_multiple(name, multiple, subject))

    prices = [v["implied_price"] for v in valuations if v["implied_price"] is not None]
    blended = sum(prices) / len(prices) if prices else None
    upside = None
    if blended is not None:
        upside = _multiple(blended - subject.current_price, subject.current_price)

    if not rows:
        logger.info("No peers supplied for %s; comps analysis is empty", subject.symbol)
    return {
        "symbol": subject.symbol,
        "peers": rows,
        "medians": medians,
        "subject_multiples": peer_multiples(subject),
        "valuations": valuations,
        "implied_price": blended,
        "current_price": subject.current_price,
        "upside": upside,
    }
