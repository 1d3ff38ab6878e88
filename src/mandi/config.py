from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_CROPS = [
    "Rice",
    "Wheat",
    "Tomato",
    "Potato",
    "Onion",
    "Cotton",
    "Maize",
    "Sugarcane",
    "Mustard",
    "Soybean",
]

REGIONS_PATH = Path(__file__).parent / "regions.yaml"


class CatalogConfig(BaseModel):
    crops: list[str] = Field(default_factory=lambda: list(DEFAULT_CROPS))

    @field_validator("crops")
    @classmethod
    def _unique_non_empty(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("catalog must list at least one crop")
        if len(set(v)) != len(v):
            raise ValueError(f"duplicate crop names in catalog: {v}")
        return v


class SynthesisConfig(BaseModel):
    base_price: int = 1200
    price_span: int = Field(6000, gt=0)
    index_base: int = 30
    # index_base + index_span - 1 must stay within the 0..100 index range
    index_span: int = Field(70, gt=0)

    @model_validator(mode="after")
    def _index_within_bounds(self) -> "SynthesisConfig":
        if self.index_base < 0 or self.index_base + self.index_span - 1 > 100:
            raise ValueError("synthesized demand/supply must fall within [0, 100]")
        return self


class TickerConfig(BaseModel):
    interval_seconds: float = Field(3.0, gt=0)
    max_fluctuation: float = Field(0.02, ge=0, lt=1)
    price_floor: int = Field(500, ge=0)
    # Probability that a tick touches demand at all.
    demand_shift_probability: float = Field(0.2, ge=0, le=1)
    max_demand_shift: int = Field(2, ge=0)


class RecommendationConfig(BaseModel):
    favorable_margin: int = 20


class RegionConfig(BaseModel):
    default_country: str = "India"
    default_state: str = "Odisha"
    default_district: str = "Bargarh"
    # country -> state -> districts, in listing order
    directory: dict[str, dict[str, list[str]]] = Field(default_factory=dict)


class MarketConfig(BaseModel):
    catalog: CatalogConfig = CatalogConfig()
    synthesis: SynthesisConfig = SynthesisConfig()
    ticker: TickerConfig = TickerConfig()
    recommendation: RecommendationConfig = RecommendationConfig()
    regions: RegionConfig = RegionConfig()

    @model_validator(mode="after")
    def _synthesis_above_floor(self) -> "MarketConfig":
        # the lowest synthesized price is base_price
        if self.synthesis.base_price < self.ticker.price_floor:
            raise ValueError(
                f"synthesis.base_price ({self.synthesis.base_price}) is below "
                f"ticker.price_floor ({self.ticker.price_floor})"
            )
        return self


def _bundled_regions() -> dict[str, Any]:
    return yaml.safe_load(REGIONS_PATH.read_text(encoding="utf-8")) or {}


def default_config() -> MarketConfig:
    return MarketConfig.model_validate({"regions": _bundled_regions()})


def load_config(path: str | Path) -> MarketConfig:
    """Load a YAML config; a missing ``regions`` section falls back to the bundled directory."""
    path = Path(path)
    data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    data.setdefault("regions", _bundled_regions())
    return MarketConfig.model_validate(data)
