import logging
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

STATEMENTS = ("income_statement", "balance_sheet", "cash_flow")

INCOME_HEADERS = (
    "consolidated statements of operations",
    "consolidated statements of income",
    "consolidated income statements",
)
BALANCE_HEADERS = (
    "consolidated balance sheets",
    "consolidated balance sheet",
    "balance sheets",
)
CASH_FLOW_HEADERS = (
    "consolidated statements of cash flows",
    "statements of cash flows",
)
NOTES_BOUNDARIES = (
    "notes to",
    "see accompanying notes",
    "the accompanying notes",
)


def classify_header(line: str) -> Optional[str]:
    """Return the statement a header line opens, or None for ordinary lines."""
    lowered = line.lower().strip()
    if any(h in lowered for h in INCOME_HEADERS):
        return "income_statement"
    if "statements of operations" in lowered and "cash" not in lowered:
        return "income_statement"
    if any(h in lowered for h in BALANCE_HEADERS):
        return "balance_sheet"
    if any(h in lowered for h in CASH_FLOW_HEADERS):
        return "cash_flow"
    return None


def is_notes_boundary(line: str) -> bool:
    lowered = line.lower()
    return any(marker in lowered for marker in NOTES_BOUNDARIES)


def split_statements(text: str) -> Dict[str, str]:
    """
    Segment filing text into income statement, balance sheet and cash flow buffers.

    A header line opens (or switches) the capture region and is itself not
    captured. A notes boundary closes the open region until the next header.
    Buffers are empty strings when their header never appears.
    """
    buffers: Dict[str, List[str]] = {stmt: [] for stmt in STATEMENTS}
    current: Optional[str] = None
    for index, line in enumerate(text.split("\n")):
        statement = classify_header(line)
        if statement:
            current = statement
            logger.debug("Found %s header at line %d: %s", statement, index, line.strip()[:120])
            continue
        if current and is_notes_boundary(line):
            current = None
            continue
        if current:
            buffers[current].append(line)

    sections = {stmt: "".join(f"{line}\n" for line in lines) for stmt, lines in buffers.items()}
    logger.info(
        "Statement buffer sizes: income=%d balance=%d cash_flow=%d",
        len(sections["income_statement"]),
        len(sections["balance_sheet"]),
        len(sections["cash_flow"]),
    )
    return sections
