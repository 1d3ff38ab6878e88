from __future__ import annotations

from dataclasses import dataclass, replace

from mandi.config import RegionConfig


@dataclass(frozen=True)
class RegionSelection:
    """Country / state / district picked in the widget. Only the district seeds the market."""

    country: str
    state: str
    district: str

    def with_district(self, district: str) -> "RegionSelection":
        return replace(self, district=district)


class RegionDirectory:
    """Lookup over the configured country -> state -> districts hierarchy."""

    def __init__(self, cfg: RegionConfig):
        self.cfg = cfg

    def countries(self) -> list[str]:
        return sorted(self.cfg.directory)

    def states(self, country: str) -> list[str]:
        if country not in self.cfg.directory:
            raise ValueError(f"Unknown country: {country!r}")
        return sorted(self.cfg.directory[country])

    def _listed_districts(self, country: str, state: str) -> list[str]:
        states = self.cfg.directory.get(country, {})
        if state not in states:
            raise ValueError(f"Unknown state {state!r} for country {country!r}")
        return states[state]

    def districts(self, country: str, state: str) -> list[str]:
        return sorted(self._listed_districts(country, state))

    def default_district(self, country: str, state: str) -> str:
        listed = self._listed_districts(country, state)
        if not listed:
            raise ValueError(f"State {state!r} has no districts")
        return listed[0]

    def initial_selection(self) -> RegionSelection:
        return RegionSelection(
            country=self.cfg.default_country,
            state=self.cfg.default_state,
            district=self.cfg.default_district,
        )

    def with_state(self, selection: RegionSelection, state: str) -> RegionSelection:
        """Switch state and re-pick that state's default district in the same step."""
        district = self.default_district(selection.country, state)
        return replace(selection, state=state, district=district)
