import logging
import re
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from valuation.models import PartialFinancialData, UnitMap

from .label_map import FIELD_RULES, KEY_FIELDS, MARKET_CAP_PHRASE, SHARES_PATTERNS
from .sections import split_statements
from .units import detect_document_units

logger = logging.getLogger(__name__)

# Optional "$", optional opening paren, comma-grouped or bare digits, optional closing paren.
AMOUNT_RE = re.compile(r"\$?\s*(?:(\()\s*)?(\d{1,3}(?:,\d{3})+|\d+)\s*(\))?")
SHARE_COUNT_RE = re.compile(r"(\d{1,3}(?:,\d{3})*(?:\.\d+)?)")
MARKET_CAP_RE = re.compile(r"\$?\s*(\d{1,3}(?:,\d{3})*(?:\.\d+)?)\s*(billion|million|thousand)", re.IGNORECASE)

MATERIALITY_FLOOR = 1000
YEAR_RANGE = (1900, 2100)
SHARE_COUNT_BAND = (100, 100_000)
SHARE_COUNT_SCALE = 1_000_000.0

QUALIFIER_SCALES = {
    "thousand": (1_000.0, "thousands"),
    "million": (1_000_000.0, "millions"),
    "billion": (1_000_000_000.0, "billions"),
}
NOT_FOUND = "not found"


def _parse_amount(text: str) -> Optional[float]:
    cleaned = text.replace(",", "").replace("$", "").strip()
    if cleaned in {"", "-", "N/A"}:
        return None
    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_amount_tokens(line: str) -> List[float]:
    """
    All numeric tokens on a line; fully parenthesized tokens are negative.

    A token with an opening paren but no closing one (a wrapped or truncated
    negative) is dropped.
    """
    amounts: List[float] = []
    line = " ".join(line.split())
    for match in AMOUNT_RE.finditer(line):
        value = _parse_amount(match.group(2))
        if value is None:
            continue
        if match.group(1):
            if not match.group(3):
                continue
            value = -value
        amounts.append(value)
    return amounts


def _is_year(value: float) -> bool:
    return YEAR_RANGE[0] < value < YEAR_RANGE[1]


def largest_amount(line: str) -> Optional[float]:
    """
    Largest material amount on a line, ignoring year-like tokens and anything
    at or below the materiality floor (negatives included).
    """
    candidates = [v for v in parse_amount_tokens(line) if v > MATERIALITY_FLOOR and not _is_year(v)]
    return max(candidates) if candidates else None


def extract_field(section: str, patterns: Sequence[Pattern[str]], multiplier: float) -> float:
    """Scan a statement buffer pattern by pattern; the first labeled line with an amount wins."""
    if not section:
        return 0.0
    lines = section.split("\n")
    for pattern in patterns:
        for line in lines:
            if not pattern.search(line):
                continue
            value = largest_amount(line)
            if value is None:
                continue
            logger.debug("Matched %r on line: %s", pattern.pattern, line.strip()[:100])
            return value * multiplier
    return 0.0


def find_shares_outstanding(text: str) -> float:
    """
    Share count from anywhere in the document.

    Only figures between 100 and 100,000 are considered and they are assumed
    to be reported in millions, so unusual share counts will be misread.
    """
    lines = text.split("\n")
    low, high = SHARE_COUNT_BAND
    for pattern in SHARES_PATTERNS:
        for line in lines:
            if not pattern.search(line):
                continue
            numbers = [float(m.replace(",", "")) for m in SHARE_COUNT_RE.findall(line)]
            valid = [n for n in numbers if low < n < high]
            if valid:
                shares = max(valid) * SHARE_COUNT_SCALE
                logger.debug("Shares outstanding %.0f from line: %s", shares, line.strip()[:100])
                return shares
    return 0.0


def find_market_cap(text: str) -> Tuple[float, str]:
    """Market value from an 'aggregate market value ... $X billion' sentence, else (0, 'not found')."""
    for line in text.split("\n"):
        if MARKET_CAP_PHRASE not in line.lower():
            continue
        match = MARKET_CAP_RE.search(line)
        if not match:
            continue
        value = float(match.group(1).replace(",", ""))
        multiplier, label = QUALIFIER_SCALES[match.group(2).lower()]
        logger.debug("Market cap %s %s from line: %s", match.group(1), label, line.strip()[:100])
        return value * multiplier, label
    return 0.0, NOT_FOUND


def extract_financial_data(text: str) -> Tuple[PartialFinancialData, UnitMap]:
    """
    Best-effort extraction of a partial financial record from 10-K text.

    Fields that cannot be found are zero. The unit map records the document
    scale for statement fields (even when the field itself was not found),
    "shares" for the share count and the detected qualifier or "not found"
    for market cap.
    """
    if not isinstance(text, str):
        text = ""
    multiplier, unit = detect_document_units(text)
    logger.info("Document units detected: %s (%.0fx)", unit, multiplier)
    sections = split_statements(text)

    values: Dict[str, float] = {}
    units: UnitMap = {}
    for rule in FIELD_RULES:
        values[rule.field] = extract_field(sections.get(rule.statement, ""), rule.patterns, multiplier)
        units[rule.field] = unit

    values["shares_outstanding"] = find_shares_outstanding(text)
    units["shares_outstanding"] = "shares"

    market_cap, market_cap_unit = find_market_cap(text)
    values["market_cap"] = market_cap
    units["market_cap"] = market_cap_unit

    found = sorted(field for field, value in values.items() if value)
    logger.info("Extracted %d of %d fields: %s", len(found), len(values), ", ".join(found) or "none")
    return PartialFinancialData(**values), units


def missing_fields(partial: PartialFinancialData) -> List[str]:
    """Display names of key fields that were not found."""
    return [label for field, label in KEY_FIELDS.items() if not getattr(partial, field)]
