from .config import (
    ContractionConfig,
    BaselineConfig,
    VolatilityConfig,
    MINIMUM_SCAN_LENGTH,
    OVERSCAN_LENGTH,
)
from .entity import Bar, BarPoint, Interval, PivotPoint, LegDelta, DetectionResult, PriceWindow
from .intervals import scan_intervals, extend_first_interval
from .merge import merge_intervals, merge_insignificant_intervals, coalesce_intervals
from .pivots import extract_pivot_points
from .legs import score_contraction
from .detector import VolatilityContractionDetector, evaluate_window

__all__ = [
    # Pipeline stages
    "scan_intervals",
    "extend_first_interval",
    "merge_intervals",
    "merge_insignificant_intervals",
    "coalesce_intervals",
    "extract_pivot_points",
    "score_contraction",
    "evaluate_window",
    "VolatilityContractionDetector",

    # Records
    "Bar",
    "BarPoint",
    "Interval",
    "PivotPoint",
    "LegDelta",
    "DetectionResult",
    "PriceWindow",

    # Configuration
    "ContractionConfig",
    "BaselineConfig",
    "VolatilityConfig",
    "MINIMUM_SCAN_LENGTH",
    "OVERSCAN_LENGTH",
]
