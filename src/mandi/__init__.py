"""Simulated district market feed for the farmer dashboard.

A district name seeds a reproducible opening dataset; a periodic ticker
random-walks it to look live; views filter, sort and flag crops on demand.
"""

from .config import load_config, default_config, MarketConfig
from .market import AnnotatedRecord, CommodityRecord, SortKey
from .session import MarketSession
