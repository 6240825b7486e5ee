from typing import Any, Dict, Optional

from .models import FinancialData

# Rating thresholds: (excellent, good, direction). Ratios in percent where the metric is a percentage.
RATING_CRITERIA = {
    "roe": (20.0, 15.0, "higher"),
    "roa": (10.0, 7.0, "higher"),
    "debt_equity": (0.3, 0.5, "lower"),
    "pe": (15.0, 25.0, "lower"),
    "pb": (2.0, 3.0, "lower"),
    "fcf_yield": (8.0, 5.0, "higher"),
}


def _safe_div(num: Optional[float], den: Optional[float]) -> Optional[float]:
    """Safe division returning None if invalid."""
    if num is None or den is None or den == 0:
        return None
    return num / den


def _pct(value: Optional[float]) -> Optional[float]:
    return value * 100 if value is not None else None


def compute_key_metrics(data: FinancialData) -> Dict[str, Optional[float]]:
    """Headline valuation and return multiples; None where a denominator is missing or zero."""
    eps = _safe_div(data.net_income, data.shares_outstanding)
    enterprise_value = data.market_cap + data.total_debt - data.cash
    ebitda = data.ebit + data.depreciation
    fcf = data.net_income + data.depreciation - data.capex
    return {
        "eps": eps,
        "pe": _safe_div(data.current_price, eps),
        "pb": _safe_div(data.current_price, data.book_value),
        "ps": _safe_div(data.market_cap, data.revenue),
        "ev_ebitda": _safe_div(enterprise_value, ebitda),
        "fcf_yield": _pct(_safe_div(fcf, data.market_cap)),
        "roe": _pct(_safe_div(data.net_income, data.total_equity)),
        "roa": _pct(_safe_div(data.net_income, data.total_assets)),
        "debt_equity": _safe_div(data.total_debt, data.total_equity),
    }


def rate_metric(metric: str, value: Optional[float]) -> str:
    criterion = RATING_CRITERIA.get(metric)
    if criterion is None or value is None:
        return "neutral"
    excellent, good, direction = criterion
    if direction == "higher":
        if value >= excellent:
            return "excellent"
        if value >= good:
            return "good"
        return "poor"
    if value <= excellent:
        return "excellent"
    if value <= good:
        return "good"
    return "poor"


def rate_key_metrics(data: FinancialData) -> Dict[str, Dict[str, Any]]:
    metrics = compute_key_metrics(data)
    return {name: {"value": value, "rating": rate_metric(name, value)} for name, value in metrics.items()}
