# metrics/__init__.py
from .atr import compute_atr, compute_true_range, AverageTrueRange
from .efficiency import (
    compute_efficiency_ratio,
    compute_adaptive_baseline,
    AdaptiveMovingAverage,
)

__all__ = [
    'compute_atr',
    'compute_true_range',
    'AverageTrueRange',
    'compute_efficiency_ratio',
    'compute_adaptive_baseline',
    'AdaptiveMovingAverage',
]
