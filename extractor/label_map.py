import re
from typing import List, NamedTuple, Pattern, Tuple


class FieldRule(NamedTuple):
    field: str
    statement: str
    patterns: Tuple[Pattern[str], ...]


def _compile(*patterns: str) -> Tuple[Pattern[str], ...]:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


# Label alternatives are tried in order; the first one that yields an amount wins.
FIELD_RULES: List[FieldRule] = [
    FieldRule(
        "revenue",
        "income_statement",
        _compile(r"total revenues?", r"net revenues?", r"total net sales", r"net sales", r"total sales"),
    ),
    FieldRule(
        "net_income",
        "income_statement",
        _compile(r"net income(?! \(loss\))", r"net earnings", r"consolidated net income", r"income attributable"),
    ),
    FieldRule(
        "ebit",
        "income_statement",
        _compile(r"operating income", r"income from operations", r"operating profit", r"operating earnings"),
    ),
    FieldRule("total_assets", "balance_sheet", _compile(r"total assets")),
    FieldRule("total_debt", "balance_sheet", _compile(r"total liabilities", r"total debt")),
    FieldRule(
        "total_equity",
        "balance_sheet",
        _compile(r"total stockholders.? equity", r"total shareholders.? equity", r"total equity"),
    ),
    FieldRule(
        "cash",
        "balance_sheet",
        _compile(r"cash and cash equivalents", r"cash and equivalents", r"cash, cash equivalents"),
    ),
    FieldRule(
        "depreciation",
        "cash_flow",
        _compile(r"depreciation and amortization", r"depreciation, depletion and amortization"),
    ),
    FieldRule(
        "capex",
        "cash_flow",
        _compile(
            r"capital expenditures",
            r"purchases of property, plant and equipment",
            r"acquisitions of property and equipment",
        ),
    ),
]

SHARES_PATTERNS = _compile(
    r"shares outstanding",
    r"common stock outstanding",
    r"shares of common stock outstanding",
    r"weighted average shares outstanding",
)

MARKET_CAP_PHRASE = "aggregate market value"

# Key fields the caller should warn about when they fall back to defaults.
KEY_FIELDS = {
    "revenue": "Revenue",
    "shares_outstanding": "Shares Outstanding",
    "total_equity": "Total Equity",
    "net_income": "Net Income",
}
