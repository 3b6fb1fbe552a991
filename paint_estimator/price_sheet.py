"""
Price sheet import: contractor spreadsheet (CSV export) → customPricing entries.

Columns: substrate_type, description, unit, then one price column per
quality × coating pair, headed "<quality>|<coating>", e.g.
"Commercial|prime+2coats". Prices are rounded to cents when read.

Each row becomes one RateEntry:
  base rate          = Commercial / prime+2coats price
  coating modifiers  = Commercial price at each coating ÷ base
  quality modifiers  = prime+2coats price at each quality ÷ base
"""

import csv
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .models import CoatingTier, QualityTier, SubstrateType, Unit
from .schemas import RateEntry

logger = logging.getLogger(__name__)

BASE_QUALITY = QualityTier.COMMERCIAL
BASE_COATING = CoatingTier.PRIME_2COATS


def price_column(quality: QualityTier, coating: CoatingTier) -> str:
    return f"{quality.value}|{coating.value}"


PRICE_COLUMNS = [price_column(q, c) for q in QualityTier for c in CoatingTier]
SHEET_COLUMNS = ["substrate_type", "description", "unit"] + PRICE_COLUMNS


@dataclass
class SkippedRow:
    row_number: int
    reason: str


@dataclass
class PriceSheetImport:
    entries: List[RateEntry] = field(default_factory=list)
    skipped: List[SkippedRow] = field(default_factory=list)


def parse_price(value: Optional[str]) -> float:
    """'$1,234.567' → 1234.57. Blank or unreadable cells are 0."""
    if value is None:
        return 0.0
    text = value.strip().replace("$", "").replace(",", "")
    if not text:
        return 0.0
    try:
        return round(float(text), 2)
    except ValueError:
        return 0.0


def row_to_entry(row: Dict[str, str]) -> Tuple[Optional[RateEntry], Optional[str]]:
    """Convert one sheet row. Returns (entry, None) or (None, reason skipped)."""
    try:
        substrate = SubstrateType((row.get("substrate_type") or "").strip())
    except ValueError:
        return None, f"unknown substrate type {row.get('substrate_type')!r}"

    description = (row.get("description") or "").strip()
    if not description:
        return None, "blank description"

    try:
        unit = Unit((row.get("unit") or "").strip())
    except ValueError:
        return None, f"unknown unit {row.get('unit')!r}"

    prices = {
        (q, c): parse_price(row.get(price_column(q, c)))
        for q in QualityTier for c in CoatingTier
    }
    base = prices[(BASE_QUALITY, BASE_COATING)]
    if base <= 0:
        return None, f"no {price_column(BASE_QUALITY, BASE_COATING)} price"

    coating_modifiers = {
        c: prices[(BASE_QUALITY, c)] / base
        for c in CoatingTier if prices[(BASE_QUALITY, c)] > 0
    }
    quality_modifiers = {
        q: prices[(q, BASE_COATING)] / base
        for q in QualityTier if prices[(q, BASE_COATING)] > 0
    }
    entry = RateEntry(
        substrate_type=substrate,
        description=description,
        unit=unit,
        base_rate=base,
        coating_modifiers=coating_modifiers,
        quality_modifiers=quality_modifiers,
    )
    return entry, None


def parse_price_sheet(lines: Iterable[str]) -> PriceSheetImport:
    """Parse CSV text lines (header row first)."""
    result = PriceSheetImport()
    reader = csv.DictReader(lines)
    missing = [c for c in SHEET_COLUMNS[:3] if c not in (reader.fieldnames or [])]
    if missing:
        raise ValueError(f"Price sheet is missing columns: {missing}")

    # header is row 1
    for row_number, row in enumerate(reader, start=2):
        entry, reason = row_to_entry(row)
        if entry is None:
            logger.info("Skipping price sheet row %d: %s", row_number, reason)
            result.skipped.append(SkippedRow(row_number, reason))
            continue
        result.entries.append(entry)

    logger.info("Price sheet: %d entries, %d rows skipped",
                len(result.entries), len(result.skipped))
    return result


def read_price_sheet(path: Path) -> PriceSheetImport:
    with open(path, newline="", encoding="utf-8-sig") as f:
        return parse_price_sheet(f)
