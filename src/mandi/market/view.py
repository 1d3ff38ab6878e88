from __future__ import annotations

from collections.abc import Sequence

import pandas as pd

from mandi.config import RecommendationConfig
from mandi.decision import classify
from mandi.market.records import AnnotatedRecord, CommodityRecord, SortKey

VIEW_COLUMNS = ["crop", "price", "demand", "supply", "favorable", "signal"]


def build_view(
    records: Sequence[CommodityRecord],
    search: str = "",
    sort_key: SortKey | str = SortKey.NAME,
    cfg: RecommendationConfig | None = None,
) -> list[AnnotatedRecord]:
    """Filter, sort and annotate the live dataset for display.

    - Filter: case-insensitive substring match on the crop name; an empty
      search matches every record.
    - Sort: ``name`` ascending, any numeric key descending. Ties keep
      catalog order.

    The input records are never mutated; the result holds frozen snapshots.
    """

    key = SortKey.parse(sort_key)
    needle = search.casefold()

    matched = [r for r in records if needle in r.name.casefold()]

    if key is SortKey.NAME:
        matched = sorted(matched, key=lambda r: (r.name.casefold(), r.name))
    else:
        matched = sorted(matched, key=lambda r: getattr(r, key.value), reverse=True)

    out: list[AnnotatedRecord] = []
    for r in matched:
        signal = classify(r, cfg)
        out.append(
            AnnotatedRecord(
                name=r.name,
                price=r.price,
                demand=r.demand,
                supply=r.supply,
                favorable=signal.favorable,
                signal=signal,
            )
        )
    return out


def view_frame(view: Sequence[AnnotatedRecord]) -> pd.DataFrame:
    rows = [
        {
            "crop": r.name,
            "price": r.price,
            "demand": r.demand,
            "supply": r.supply,
            "favorable": r.favorable,
            "signal": r.signal.value,
        }
        for r in view
    ]
    return pd.DataFrame(rows, columns=VIEW_COLUMNS)
