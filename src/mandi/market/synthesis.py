from __future__ import annotations

from collections.abc import Sequence

from mandi.config import SynthesisConfig
from mandi.market.records import CommodityRecord


def _spread(seed: int, multiplier: int, span: int) -> int:
    # |trunc-remainder(x, m)| == |x| mod m for m > 0
    return abs(seed * multiplier) % span


def synthesize_dataset(
    seed: int,
    catalog: Sequence[str],
    cfg: SynthesisConfig | None = None,
) -> list[CommodityRecord]:
    """Build the opening dataset for a district seed, one record per crop in catalog order.

    Plain modular arithmetic on the seed: the same seed always yields the
    same prices and indices. With the default config price lands in
    [1200, 7199] and demand/supply in [30, 99].
    """

    cfg = cfg or SynthesisConfig()
    records: list[CommodityRecord] = []
    for i, crop in enumerate(catalog, start=1):
        records.append(
            CommodityRecord(
                name=crop,
                price=cfg.base_price + _spread(seed, i, cfg.price_span),
                demand=cfg.index_base + _spread(seed, i + 1, cfg.index_span),
                supply=cfg.index_base + _spread(seed, i + 2, cfg.index_span),
            )
        )
    return records
