"""Per-crop recommendation rules.

Rules-based, evaluated on the current quote at render time and never
stored on the record:
- BEST: demand exceeds supply by more than the favorable margin
- HIGH_DEMAND: demand above supply, but not by enough to recommend
- VOLATILE: everything else
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from mandi.config import RecommendationConfig
from mandi.market.records import CommodityRecord


class MarketSignal(Enum):
    """Display signal for one crop."""
    BEST = "BEST"
    HIGH_DEMAND = "HIGH_DEMAND"
    VOLATILE = "VOLATILE"

    @property
    def favorable(self) -> bool:
        return self is MarketSignal.BEST


def is_favorable(record: CommodityRecord, cfg: RecommendationConfig | None = None) -> bool:
    margin = (cfg or RecommendationConfig()).favorable_margin
    return record.demand > record.supply + margin


def classify(record: CommodityRecord, cfg: RecommendationConfig | None = None) -> MarketSignal:
    if is_favorable(record, cfg):
        return MarketSignal.BEST
    if record.demand > record.supply:
        return MarketSignal.HIGH_DEMAND
    return MarketSignal.VOLATILE


def recommended(
    records: Iterable[CommodityRecord], cfg: RecommendationConfig | None = None
) -> list[str]:
    """Names of the favorable crops, in input order."""
    return [r.name for r in records if is_favorable(r, cfg)]
