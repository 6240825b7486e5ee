import logging
from typing import List, Optional, Tuple

from valuation.models import FinancialData, PartialFinancialData

from .parser import missing_fields

logger = logging.getLogger(__name__)

TEXT_SYMBOL = "FROM-TEXT"

# Fallbacks for a partial analysis when the filing text did not yield a field.
DEFAULT_BETA = 1.2
DEFAULT_SHARES_OUTSTANDING = 1_600_000_000.0
DEFAULT_REVENUE = 50_000_000_000.0
DEFAULT_TOTAL_EQUITY = 90_000_000_000.0
DEFAULT_NET_INCOME = 5_000_000_000.0
DEFAULT_TOTAL_DEBT = 12_000_000_000.0
DEFAULT_CASH = 8_000_000_000.0
DEFAULT_TOTAL_ASSETS = 180_000_000_000.0
DEFAULT_PRICE = 150.0
DEFAULT_EBIT_MARGIN = 0.15
DEFAULT_DA_PCT = 0.03
DEFAULT_CAPEX_PCT = 0.04
DEFAULT_NWC_PCT = 0.02


def complete_financial_data(
    partial: PartialFinancialData,
    company_name: str,
    symbol: Optional[str] = None,
) -> Tuple[FinancialData, List[str]]:
    """
    Fill every zero field of an extracted record so it can be valued.

    Returns the completed record and the display names of the key fields that
    had to be defaulted. The price is derived from market cap when one was
    found; otherwise a placeholder price sets the market cap.
    """
    if not company_name or not company_name.strip():
        raise ValueError("company_name is required to complete extracted data")

    missing = missing_fields(partial)
    if missing:
        logger.warning("Could not find %s; using defaults for a partial analysis", ", ".join(missing))

    shares = partial.shares_outstanding or DEFAULT_SHARES_OUTSTANDING
    revenue = partial.revenue or DEFAULT_REVENUE
    total_equity = partial.total_equity or DEFAULT_TOTAL_EQUITY

    market_cap = partial.market_cap
    if market_cap > 0 and shares > 0:
        current_price = market_cap / shares
        logger.info("Derived price %.2f from extracted market cap", current_price)
    else:
        current_price = DEFAULT_PRICE
        market_cap = current_price * shares
        logger.info("No market cap in text; using placeholder price %.2f", current_price)

    data = FinancialData(
        symbol=symbol or partial.symbol or TEXT_SYMBOL,
        company_name=company_name.strip(),
        revenue=revenue,
        net_income=partial.net_income or DEFAULT_NET_INCOME,
        shares_outstanding=shares,
        total_debt=partial.total_debt or DEFAULT_TOTAL_DEBT,
        cash=partial.cash or DEFAULT_CASH,
        ebit=partial.ebit or revenue * DEFAULT_EBIT_MARGIN,
        total_assets=partial.total_assets or DEFAULT_TOTAL_ASSETS,
        total_equity=total_equity,
        depreciation=partial.depreciation or revenue * DEFAULT_DA_PCT,
        capex=partial.capex or revenue * DEFAULT_CAPEX_PCT,
        beta=partial.beta or DEFAULT_BETA,
        current_price=current_price,
        market_cap=market_cap,
        book_value=total_equity / shares,
        working_capital=partial.working_capital or revenue * DEFAULT_NWC_PCT,
    )
    return data, missing
