import logging
import os
from typing import Tuple

logger = logging.getLogger(__name__)


def _env_int(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default


# Scale is declared in the filing preamble; only this many leading lines are scanned.
UNIT_SCAN_LINES = _env_int("EXTRACT_UNIT_SCAN_LINES", 100)

# Checked in this order on each line.
SCALE_PHRASES = (
    ("in thousands", 1_000.0, "thousands"),
    ("in millions", 1_000_000.0, "millions"),
    ("in billions", 1_000_000_000.0, "billions"),
)
DEFAULT_SCALE = (1_000.0, "thousands")


def detect_document_units(text: str) -> Tuple[float, str]:
    """Return (multiplier, label) for the document; 10-K filings default to thousands."""
    for line in text.split("\n")[:UNIT_SCAN_LINES]:
        lowered = line.lower()
        for phrase, multiplier, label in SCALE_PHRASES:
            if phrase in lowered:
                logger.info("Found %s unit declaration: %s", label, line.strip()[:120])
                return multiplier, label
    return DEFAULT_SCALE
