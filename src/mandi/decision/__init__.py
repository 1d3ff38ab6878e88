"""Recommendation layer.

Flags crops worth highlighting from the demand/supply relationship of the
live quote. Pure functions; nothing here mutates the dataset.
"""

from .recommendation import MarketSignal, classify, is_favorable, recommended  # noqa

__all__ = [
    "MarketSignal",
    "classify",
    "is_favorable",
    "recommended",
]
