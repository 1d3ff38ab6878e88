from .records import AnnotatedRecord, CommodityRecord, SortKey
from .seed import district_seed, to_int32
from .synthesis import synthesize_dataset
from .evolution import clamp_index, evolve_dataset, evolve_record
from .view import build_view, view_frame

__all__ = [
    "AnnotatedRecord",
    "CommodityRecord",
    "SortKey",
    "district_seed",
    "to_int32",
    "synthesize_dataset",
    "clamp_index",
    "evolve_dataset",
    "evolve_record",
    "build_view",
    "view_frame",
]
