from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mandi.decision import MarketSignal


@dataclass
class CommodityRecord:
    """One crop's live quote. Mutated in place by the ticker."""

    name: str
    price: int
    demand: int  # 0..100 demand index
    supply: int  # 0..100 supply index


class SortKey(Enum):
    NAME = "name"
    PRICE = "price"
    DEMAND = "demand"
    SUPPLY = "supply"

    @classmethod
    def parse(cls, value: "SortKey | str") -> "SortKey":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            options = ", ".join(k.value for k in cls)
            raise ValueError(f"Unsupported sort key: {value!r} (expected one of {options})") from None


@dataclass(frozen=True)
class AnnotatedRecord:
    """Snapshot of a record as rendered, with derived recommendation fields."""

    name: str
    price: int
    demand: int
    supply: int
    favorable: bool
    signal: MarketSignal
