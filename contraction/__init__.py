"""Volatility contraction pattern detection around an adaptive baseline."""

from .core.config import ContractionConfig, BaselineConfig, VolatilityConfig
from .core.detector import VolatilityContractionDetector, evaluate_window
from .core.entity import Bar, DetectionResult, PivotPoint, LegDelta, Interval, PriceWindow
from .detect import detect_volatility_contraction, find_contraction_patterns
from .history import PatternHistory
from .metrics import compute_atr, compute_adaptive_baseline, compute_efficiency_ratio
from .metrics.types import BarNumber, BarOffset, IntervalType, to_offset, to_number
from .screen import ScreenConfig, compute_growth, screen_universe

__all__ = [
    'ContractionConfig',
    'BaselineConfig',
    'VolatilityConfig',
    'ScreenConfig',
    'VolatilityContractionDetector',
    'evaluate_window',
    'detect_volatility_contraction',
    'find_contraction_patterns',
    'screen_universe',
    'compute_growth',
    'compute_atr',
    'compute_adaptive_baseline',
    'compute_efficiency_ratio',
    'PatternHistory',
    'Bar',
    'DetectionResult',
    'PivotPoint',
    'LegDelta',
    'Interval',
    'PriceWindow',
    'BarNumber',
    'BarOffset',
    'IntervalType',
    'to_offset',
    'to_number',
]
