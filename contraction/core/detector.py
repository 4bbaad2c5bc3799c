# core/detector.py
"""
Volatility contraction detection, one bar at a time.

The detector owns the only state carried between bars: the adaptive baseline
and ATR recurrences plus a bounded history of bars. Everything built during an
evaluation (intervals, pivots, legs) is rebuilt from scratch on each call.
"""
import logging
from collections import deque
from typing import Deque, Optional

import numpy as np

from contraction.core.config import ContractionConfig
from contraction.core.entity import Bar, DetectionResult, PriceWindow
from contraction.core.intervals import scan_intervals, extend_first_interval
from contraction.core.legs import score_contraction, is_contraction
from contraction.core.merge import merge_intervals
from contraction.core.pivots import extract_pivot_points
from contraction.metrics.atr import AverageTrueRange
from contraction.metrics.efficiency import AdaptiveMovingAverage
from contraction.metrics.types import BarNumber

logger = logging.getLogger(__name__)


def evaluate_window(window: PriceWindow, config: ContractionConfig) -> DetectionResult:
    """
    Run scan → extend → merge → pivots → score over one window.

    Args:
        window: Bars with baseline/ATR values; the last bar is the
            evaluation bar.
        config: Detector parameters.

    Returns:
        DetectionResult. Not found when the window is shorter than
        `scan_length + overscan_length`, when too few intervals survive to
        form `minimum_required_legs` legs, or when too few legs contract.
    """
    if len(window) < config.lookback:
        logger.debug("bar %d: %d bars of history, need %d", window.current, len(window), config.lookback)
        return DetectionResult.not_found()

    intervals = scan_intervals(window, config.scan_length)
    if len(intervals) + 1 < config.minimum_required_legs:
        logger.debug("bar %d: only %d intervals scanned", window.current, len(intervals))
        return DetectionResult(found=False, intervals=tuple(intervals))

    intervals = extend_first_interval(intervals, window, config.scan_length, config.overscan_length)
    intervals = merge_intervals(intervals, window, config.minimum_atr_delta)
    if len(intervals) + 1 < config.minimum_required_legs:
        logger.debug("bar %d: only %d intervals left after merging", window.current, len(intervals))
        return DetectionResult(found=False, intervals=tuple(intervals))

    pivots = extract_pivot_points(intervals, window)
    ratio, legs = score_contraction(pivots)
    found = is_contraction(
        pivots, ratio,
        config.minimum_required_legs,
        config.minimum_percentage_contracting_legs
    )
    if found:
        logger.debug("bar %d: contraction over %d pivots, ratio %.2f", window.current, len(pivots), ratio)

    return DetectionResult(
        found=found,
        open_time=intervals[0].open.time,
        close_time=intervals[-1].close.time,
        open=intervals[0].open.price,
        high=max(interval.high.price for interval in intervals),
        low=min(interval.low.price for interval in intervals),
        close=intervals[-1].close.price,
        pivots=tuple(pivots),
        contraction_ratio=ratio,
        legs=legs,
        intervals=tuple(intervals),
    )


class VolatilityContractionDetector:
    """
    Incremental detector fed one closed bar at a time, oldest first.

    `update` must see every bar, including bars that are never evaluated,
    so the baseline and ATR stay aligned with the bar numbers.
    """

    def __init__(self, config: Optional[ContractionConfig] = None):
        self.config = config or ContractionConfig()
        baseline = self.config.baseline
        self._baseline = AdaptiveMovingAverage(
            fast_length=baseline.fast_length,
            slow_length=baseline.slow_length,
            efficiency_length=baseline.efficiency_length,
            momentum_length=baseline.momentum_length,
        )
        self._volatility = AverageTrueRange(self.config.volatility.length)

        lookback = self.config.lookback
        self._bars: Deque[Bar] = deque(maxlen=lookback)
        self._baselines: Deque[float] = deque(maxlen=lookback)
        self._volatilities: Deque[float] = deque(maxlen=lookback)
        self._count = 0
        self.result = DetectionResult.not_found()

    @property
    def bar_count(self) -> int:
        """Bars fed so far."""
        return self._count

    @property
    def current_bar(self) -> Optional[BarNumber]:
        return BarNumber(self._count - 1) if self._count else None

    @property
    def baseline(self) -> Optional[float]:
        return self._baseline.value

    @property
    def momentum(self) -> Optional[float]:
        """Baseline change over `momentum_length` bars; None until enough bars."""
        return self._baseline.momentum

    @property
    def volatility(self) -> Optional[float]:
        return self._volatility.value

    def update(self, bar: Bar) -> None:
        """Advance the recurrences by one bar without evaluating."""
        if self._bars and bar.time is not None and self._bars[-1].time is not None \
                and bar.time < self._bars[-1].time:
            raise ValueError(f"bar at {bar.time} arrived after bar at {self._bars[-1].time}")

        self._bars.append(bar)
        self._baselines.append(self._baseline.update(bar.close))
        self._volatilities.append(self._volatility.update(bar.high, bar.low, bar.close))
        self._count += 1

    def window(self) -> PriceWindow:
        """Bars currently held, with their baseline and ATR."""
        if not self._count:
            raise ValueError("no bars have been fed")
        bars = self._bars
        return PriceWindow(
            time=tuple(bar.time for bar in bars),
            open=np.array([bar.open for bar in bars], dtype=np.float64),
            high=np.array([bar.high for bar in bars], dtype=np.float64),
            low=np.array([bar.low for bar in bars], dtype=np.float64),
            close=np.array([bar.close for bar in bars], dtype=np.float64),
            baseline=np.array(self._baselines, dtype=np.float64),
            volatility=np.array(self._volatilities, dtype=np.float64),
            current=self.current_bar,
        )

    def evaluate(self) -> DetectionResult:
        """Evaluate the pattern ending at the most recent bar."""
        self.result = DetectionResult.not_found()
        if self._count < self.config.lookback:
            logger.debug("%d bars fed, need %d", self._count, self.config.lookback)
            return self.result

        self.result = evaluate_window(self.window(), self.config)
        return self.result

    def process_bar(self, bar: Bar) -> DetectionResult:
        """Feed `bar` and evaluate in one step."""
        self.update(bar)
        return self.evaluate()
