import logging
import math
from typing import Any, Dict, List, Optional

from .models import DCFAssumptions, DCFResult, FinancialData, WACCResult

logger = logging.getLogger(__name__)

FORECAST_YEARS = 5
# Fixed pre-tax cost of debt. Placeholder, not derived from the company's actual obligations.
COST_OF_DEBT = 0.04


class ValuationDomainError(ValueError):
    """Inputs for which the DCF has no meaningful finite answer."""

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code


def _ieee_div(num: float, den: float) -> float:
    """Float division that yields inf/nan instead of raising on a zero denominator."""
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num) * math.copysign(1.0, den)
    return num / den


def compute_wacc(data: FinancialData, assumptions: DCFAssumptions) -> WACCResult:
    market_value = data.market_cap + data.total_debt
    equity_ratio = _ieee_div(data.market_cap, market_value)
    debt_ratio = _ieee_div(data.total_debt, market_value)

    # CAPM
    cost_of_equity = assumptions.risk_free_rate + data.beta * assumptions.market_risk_premium
    cost_of_debt = COST_OF_DEBT

    wacc = equity_ratio * cost_of_equity + debt_ratio * cost_of_debt * (1 - assumptions.tax_rate)
    return WACCResult(
        cost_of_equity=cost_of_equity,
        cost_of_debt=cost_of_debt,
        wacc=wacc,
        market_value=market_value,
        debt_ratio=debt_ratio,
        equity_ratio=equity_ratio,
    )


def _growth_rate_for_year(rates: List[float], year_index: int) -> float:
    if year_index < len(rates):
        return rates[year_index]
    return rates[-1]


def _horizon(assumptions: DCFAssumptions, years: Optional[int]) -> int:
    if years is None:
        return max(len(assumptions.revenue_growth_rates), FORECAST_YEARS)
    if years < 1:
        raise ValueError(f"Forecast horizon must be at least one year, got {years}")
    return years


def project_fcf_detail(
    data: FinancialData,
    assumptions: DCFAssumptions,
    years: Optional[int] = None,
) -> List[Dict[str, Any]]:
    """
    Year-by-year free cash flow build from compounding revenue.

    Each row carries the growth rate applied plus revenue, EBIT, NOPAT, D&A,
    capex, change in NWC and FCF. Years beyond the supplied growth rates reuse
    the last supplied rate.
    """
    rows: List[Dict[str, Any]] = []
    revenue = data.revenue
    for year_index in range(_horizon(assumptions, years)):
        growth = _growth_rate_for_year(assumptions.revenue_growth_rates, year_index)
        revenue = revenue * (1 + growth)
        ebit = revenue * assumptions.ebit_margin
        nopat = ebit * (1 - assumptions.tax_rate)
        da = revenue * assumptions.depreciation_rate
        capex = revenue * assumptions.capex_rate
        nwc_change = revenue * assumptions.nwc_rate
        fcf = nopat + da - capex - nwc_change
        rows.append(
            {
                "year": year_index + 1,
                "growth_rate": growth,
                "revenue": revenue,
                "ebit": ebit,
                "nopat": nopat,
                "depreciation": da,
                "capex": capex,
                "nwc_change": nwc_change,
                "fcf": fcf,
            }
        )
    return rows


def project_fcf(
    data: FinancialData,
    assumptions: DCFAssumptions,
    years: Optional[int] = None,
) -> List[float]:
    return [row["fcf"] for row in project_fcf_detail(data, assumptions, years)]


def compute_valuation(
    data: FinancialData,
    assumptions: DCFAssumptions,
    years: Optional[int] = None,
) -> DCFResult:
    """
    Full DCF: WACC, projected FCF, Gordon growth terminal value, present values
    and the equity bridge down to a per-share value.

    Raises ValuationDomainError when WACC does not exceed the terminal growth
    rate, or when shares outstanding or the current price is zero.
    """
    wacc = compute_wacc(data, assumptions).wacc
    g = assumptions.terminal_growth_rate
    # Written as "not >" so a NaN WACC is rejected too.
    if not wacc > g:
        raise ValuationDomainError(
            "terminal_growth",
            f"WACC ({wacc:.2%}) must be greater than terminal growth ({g:.2%})",
        )
    if data.shares_outstanding == 0:
        raise ValuationDomainError("shares_outstanding", "Shares outstanding must be non-zero")
    if data.current_price == 0:
        raise ValuationDomainError("current_price", "Current price must be non-zero to compute upside")

    projected = project_fcf(data, assumptions, years)
    horizon = len(projected)

    terminal_fcf = projected[-1] * (1 + g)
    terminal_value = terminal_fcf / (wacc - g)

    present_values = [fcf / (1 + wacc) ** (t + 1) for t, fcf in enumerate(projected)]
    pv_terminal = terminal_value / (1 + wacc) ** horizon

    enterprise_value = sum(present_values) + pv_terminal
    equity_value = enterprise_value - data.total_debt + data.cash
    per_share = equity_value / data.shares_outstanding
    upside = (per_share - data.current_price) / data.current_price

    logger.debug(
        "DCF for %s: wacc=%.4f ev=%.0f per_share=%.2f upside=%.3f",
        data.symbol,
        wacc,
        enterprise_value,
        per_share,
        upside,
    )
    return DCFResult(
        wacc=wacc,
        projected_fcf=projected,
        terminal_value=terminal_value,
        present_value_fcf=present_values,
        present_value_terminal=pv_terminal,
        enterprise_value=enterprise_value,
        equity_value=equity_value,
        intrinsic_value_per_share=per_share,
        current_price=data.current_price,
        upside=upside,
    )
