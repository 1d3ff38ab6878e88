"""Invariant checks for a live commodity dataset."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from mandi.config import TickerConfig
from mandi.market.evolution import INDEX_MAX, INDEX_MIN
from mandi.market.records import CommodityRecord

logger = logging.getLogger(__name__)


@dataclass
class DatasetValidationResult:
    """Results of validating a dataset against the catalog."""

    is_valid: bool
    num_records: int
    district: str = ""
    warnings: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        status = "✓ VALID" if self.is_valid else "✗ INVALID"
        lines = [f"{status} | {self.district or 'dataset'}", f"  Records: {self.num_records}"]
        if self.warnings:
            lines.append(f"  ⚠ Warnings ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"    - {w}")
        if self.errors:
            lines.append(f"  ✗ Errors ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"    - {e}")
        return "\n".join(lines)


def validate_dataset(
    records: Sequence[CommodityRecord],
    catalog: Sequence[str],
    district: str = "",
    price_floor: int | None = None,
) -> DatasetValidationResult:
    """Check a dataset for catalog completeness and record bounds.

    Checks:
    - One record per catalog crop, in catalog order
    - Price at or above the floor
    - Demand and supply within the index range

    Args:
        records: live or freshly synthesized dataset
        catalog: ordered crop names the dataset must cover
        district: district name for reporting
        price_floor: minimum allowed price (defaults to the ticker floor)

    Returns:
        DatasetValidationResult with status and details
    """
    floor = TickerConfig().price_floor if price_floor is None else price_floor
    result = DatasetValidationResult(is_valid=True, num_records=len(records), district=district)

    names = [r.name for r in records]
    if len(names) != len(catalog):
        result.errors.append(f"Expected {len(catalog)} records, found {len(names)}")

    dupes = sorted({n for n in names if names.count(n) > 1})
    if dupes:
        result.errors.append(f"Duplicate crops: {dupes}")

    missing = [c for c in catalog if c not in names]
    if missing:
        result.errors.append(f"Missing crops: {missing}")

    unknown = [n for n in names if n not in catalog]
    if unknown:
        result.errors.append(f"Crops not in catalog: {unknown}")

    if not (dupes or missing or unknown) and names != list(catalog):
        result.warnings.append("Records are not in catalog order")

    for r in records:
        if r.price < floor:
            result.errors.append(f"{r.name}: price {r.price} below floor {floor}")
        for field_name in ("demand", "supply"):
            value = getattr(r, field_name)
            if not INDEX_MIN <= value <= INDEX_MAX:
                result.errors.append(
                    f"{r.name}: {field_name} {value} outside [{INDEX_MIN}, {INDEX_MAX}]"
                )

    result.is_valid = not result.errors
    if not result.is_valid:
        logger.warning("Dataset validation failed for %s: %d errors", district or "dataset", len(result.errors))

    return result
