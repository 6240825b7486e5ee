from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Field name -> detected scale label ("thousands", "millions", "billions", "shares", "not found").
UnitMap = Dict[str, str]


class FinancialData(BaseModel):
    """Complete company record consumed by the valuation engine.

    Monetary fields are absolute currency units, shares a raw count and
    beta/rates decimal fractions.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    company_name: str
    market_cap: float
    current_price: float
    shares_outstanding: float
    total_debt: float
    cash: float
    revenue: float
    ebit: float
    net_income: float
    total_assets: float
    total_equity: float
    beta: float
    book_value: float
    depreciation: float
    capex: float
    working_capital: float


class PartialFinancialData(BaseModel):
    """Extractor output: zero means the field was not found in the source text."""

    model_config = ConfigDict(frozen=True)

    symbol: Optional[str] = None
    company_name: Optional[str] = None
    market_cap: float = 0.0
    current_price: float = 0.0
    shares_outstanding: float = 0.0
    total_debt: float = 0.0
    cash: float = 0.0
    revenue: float = 0.0
    ebit: float = 0.0
    net_income: float = 0.0
    total_assets: float = 0.0
    total_equity: float = 0.0
    beta: float = 0.0
    book_value: float = 0.0
    depreciation: float = 0.0
    capex: float = 0.0
    working_capital: float = 0.0


class DCFAssumptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    revenue_growth_rates: List[float] = Field(min_length=1)
    ebit_margin: float
    tax_rate: float
    depreciation_rate: float
    capex_rate: float
    nwc_rate: float
    terminal_growth_rate: float
    risk_free_rate: float
    market_risk_premium: float


class WACCResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    cost_of_equity: float
    cost_of_debt: float
    wacc: float
    market_value: float
    debt_ratio: float
    equity_ratio: float


class DCFResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    wacc: float
    projected_fcf: List[float]
    terminal_value: float
    present_value_fcf: List[float]
    present_value_terminal: float
    enterprise_value: float
    equity_value: float
    intrinsic_value_per_share: float
    current_price: float
    upside: float


# Starting assumptions used by the dashboard before the user edits anything.
DEFAULT_ASSUMPTIONS = DCFAssumptions(
    revenue_growth_rates=[0.15, 0.12, 0.10, 0.08, 0.05],
    ebit_margin=0.20,
    tax_rate=0.25,
    depreciation_rate=0.03,
    capex_rate=0.04,
    nwc_rate=0.02,
    terminal_growth_rate=0.025,
    risk_free_rate=0.045,
    market_risk_premium=0.06,
)
