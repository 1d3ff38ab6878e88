"""Random-walk evolution of a live dataset.

Each tick nudges every price by up to +/- ``max_fluctuation`` and
occasionally shifts demand by a small integer. Supply never moves. The
randomness is cosmetic and unseeded in production; pass a seeded
``numpy.random.Generator`` to make a run reproducible.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable

import numpy as np

from mandi.config import TickerConfig
from mandi.market.records import CommodityRecord

logger = logging.getLogger(__name__)

INDEX_MIN = 0
INDEX_MAX = 100


def clamp_index(value: int) -> int:
    return max(INDEX_MIN, min(INDEX_MAX, value))


def evolve_record(record: CommodityRecord, rng: np.random.Generator, cfg: TickerConfig) -> None:
    """Apply one tick to a single record in place."""
    fluctuation = float(rng.uniform(-cfg.max_fluctuation, cfg.max_fluctuation))
    record.price = max(cfg.price_floor, math.floor(record.price * (1 + fluctuation)))

    shift = 0
    if rng.random() > 1.0 - cfg.demand_shift_probability:
        shift = int(rng.integers(-cfg.max_demand_shift, cfg.max_demand_shift + 1))
    record.demand = clamp_index(record.demand + shift)


def evolve_dataset(
    records: Iterable[CommodityRecord],
    rng: np.random.Generator,
    cfg: TickerConfig | None = None,
) -> None:
    cfg = cfg or TickerConfig()
    count = 0
    for record in records:
        evolve_record(record, rng, cfg)
        count += 1
    logger.debug("Evolved %d records", count)
