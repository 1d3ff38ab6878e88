from __future__ import annotations

import logging
from dataclasses import replace

import numpy as np

from mandi.config import MarketConfig, default_config
from mandi.market import (
    AnnotatedRecord,
    CommodityRecord,
    SortKey,
    build_view,
    district_seed,
    evolve_dataset,
    synthesize_dataset,
)
from mandi.regions import RegionDirectory, RegionSelection
from mandi.scheduling import PeriodicHandle, PollingScheduler, Scheduler

logger = logging.getLogger(__name__)


class MarketSession:
    """Live market feed for the currently selected district.

    Stopped until a district is selected. Each selection synthesizes a fresh
    dataset from the district name and starts one periodic ticker; the
    previous ticker is cancelled first, so at most one ever mutates the
    dataset. ``dispose()`` stops the feed for good.
    """

    def __init__(
        self,
        cfg: MarketConfig | None = None,
        scheduler: Scheduler | None = None,
        rng: np.random.Generator | None = None,
    ):
        self.cfg = cfg or default_config()
        self.scheduler = scheduler or PollingScheduler()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.directory = RegionDirectory(self.cfg.regions)
        self.selection: RegionSelection = self.directory.initial_selection()

        self._records: list[CommodityRecord] = []
        self._handle: PeriodicHandle | None = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._handle is not None and self._handle.active

    @property
    def district(self) -> str | None:
        return self.selection.district if self.running else None

    def records(self) -> list[CommodityRecord]:
        """Copies of the live records, in catalog order."""
        return [replace(r) for r in self._records]

    def _stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._records = []

    def select_region(self, district: str) -> None:
        """Bind the feed to ``district``: regenerate the dataset and restart the ticker."""
        if self.running and district == self.selection.district:
            return

        previous = self.district
        self._stop()

        self.selection = self.selection.with_district(district)
        self._records = synthesize_dataset(
            district_seed(district), self.cfg.catalog.crops, self.cfg.synthesis
        )
        self.ticks = 0
        self._handle = self.scheduler.call_every(self.cfg.ticker.interval_seconds, self.tick)

        if previous is None:
            logger.info("Market feed started for %s", district)
        else:
            logger.info("Market feed switched from %s to %s", previous, district)

    def select_state(self, state: str) -> None:
        """Switch state and immediately load its default district."""
        selection = self.directory.with_state(self.selection, state)
        self.selection = replace(self.selection, state=selection.state)
        self.select_region(selection.district)

    def tick(self) -> None:
        """One evolution step; also what the scheduler calls."""
        if not self._records:
            return
        evolve_dataset(self._records, self.rng, self.cfg.ticker)
        self.ticks += 1
        logger.debug("Tick %d for %s", self.ticks, self.selection.district)

    def get_view(self, search_text: str = "", sort_key: SortKey | str = SortKey.NAME) -> list[AnnotatedRecord]:
        return build_view(self._records, search_text, sort_key, self.cfg.recommendation)

    def dispose(self) -> None:
        if self.running:
            logger.info("Market feed stopped for %s", self.selection.district)
        self._stop()
