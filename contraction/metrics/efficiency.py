"""
Kaufman efficiency ratio and the adaptive moving average built on it.
The adaptive average is the trend baseline the interval scanner classifies
closes against.
"""

from collections import deque
from typing import Deque, Optional

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from .types import Prices, RatioArray, BaselineArray


def _validate_lengths(fast_length: int, slow_length: int, efficiency_length: int) -> None:
    if fast_length <= 0:
        raise ValueError("fast_length must be > 0")
    if slow_length <= 0:
        raise ValueError("slow_length must be > 0")
    if fast_length >= slow_length:
        raise ValueError("fast_length must be < slow_length")
    if efficiency_length <= 0:
        raise ValueError("efficiency_length must be > 0")


def _smoothing_constant(ratio: float, fast_sc: float, slow_sc: float) -> float:
    sc = ratio * (fast_sc - slow_sc) + slow_sc
    return sc * sc


def compute_efficiency_ratio(close: Prices, length: int = 10) -> RatioArray:
    """
    Compute Kaufman's Efficiency Ratio over the last `length` price changes.

    ER = |P_t - P_{t-length}| / Σ|P_i - P_{i-1}|, i in (t-length, t].
    Ranges from 0 (pure noise) to 1 (straight line).

    Args:
        close: 1D array of closing prices (numeric).
        length: Number of price changes in the window. Default is 10.

    Returns:
        RatioArray: Ratios in [0, 1], NaN for the first `length` bars.

    Raises:
        ValueError: If `length < 1` or input is not 1D.
        TypeError: If input is not numeric.

    Notes:
        - A flat window (zero path length) has no direction and yields 0.0.
    """
    # === PRECONDITIONS ===
    close = np.asarray(close)
    if close.ndim != 1:
        raise ValueError("close must be 1-dimensional")
    if not np.issubdtype(close.dtype, np.number):
        raise TypeError("close must be numeric")
    if length < 1:
        raise ValueError("length must be ≥ 1")

    n = len(close)
    ratio = np.full(n, np.nan, dtype=np.float64)
    if n <= length:
        return ratio

    close = close.astype(np.float64, copy=False)

    # === NET DISPLACEMENT AND PATH LENGTH ===
    net = np.abs(close[length:] - close[:-length])
    diffs = np.abs(np.diff(close))
    path = np.sum(sliding_window_view(diffs, window_shape=length), axis=1)

    with np.errstate(divide='ignore', invalid='ignore'):
        er = np.where(path > 0, net / np.where(path > 0, path, 1.0), 0.0)

    ratio[length:] = np.clip(er, 0.0, 1.0)
    return ratio


def compute_adaptive_baseline(
        close: Prices,
        fast_length: int = 3,
        slow_length: int = 53,
        efficiency_length: int = 10
) -> BaselineArray:
    """
    Compute Kaufman's Adaptive Moving Average (KAMA) over a price array.

    Args:
        close: 1D array of closing prices.
        fast_length: Length of the fast EMA bound.
        slow_length: Length of the slow EMA bound (must exceed `fast_length`).
        efficiency_length: Efficiency ratio window.

    Returns:
        BaselineArray: One baseline value per bar. The first
        `efficiency_length` values equal the price itself.

    Raises:
        ValueError: On invalid lengths or non-1D input.

    Notes:
        - SC = (ER * (fast_sc - slow_sc) + slow_sc)^2 with
          fast_sc = 2 / (fast + 1), slow_sc = 2 / (slow + 1).
        - KAMA[t] = KAMA[t-1] + SC * (P[t] - KAMA[t-1]).
    """
    _validate_lengths(fast_length, slow_length, efficiency_length)
    close = np.asarray(close, dtype=np.float64)
    if close.ndim != 1:
        raise ValueError("close must be 1-dimensional")

    n = len(close)
    baseline = close.copy()
    if n <= efficiency_length:
        return baseline

    fast_sc = 2.0 / (fast_length + 1)
    slow_sc = 2.0 / (slow_length + 1)
    er = compute_efficiency_ratio(close, efficiency_length)

    # === RECURSIVE SMOOTHING ===
    for i in range(efficiency_length, n):
        sc = _smoothing_constant(er[i], fast_sc, slow_sc)
        baseline[i] = baseline[i - 1] + sc * (close[i] - baseline[i - 1])

    return baseline


class AdaptiveMovingAverage:
    """
    Incremental KAMA, advanced one price at a time.

    Matches `compute_adaptive_baseline` bar for bar. Until
    `efficiency_length + 1` prices have been seen the baseline seeds from
    the price directly.
    """

    def __init__(
            self,
            fast_length: int = 3,
            slow_length: int = 53,
            efficiency_length: int = 10,
            momentum_length: int = 1
    ):
        _validate_lengths(fast_length, slow_length, efficiency_length)
        if momentum_length < 1:
            raise ValueError("momentum_length must be ≥ 1")

        self.fast_length = fast_length
        self.slow_length = slow_length
        self.efficiency_length = efficiency_length
        self.momentum_length = momentum_length

        self._fast_sc = 2.0 / (fast_length + 1)
        self._slow_sc = 2.0 / (slow_length + 1)
        self._prices: Deque[float] = deque(maxlen=efficiency_length + 1)
        self._values: Deque[float] = deque(maxlen=momentum_length + 1)

        self.efficiency_ratio: Optional[float] = None
        self.smoothing_constant: Optional[float] = None

    @property
    def value(self) -> Optional[float]:
        return self._values[-1] if self._values else None

    @property
    def momentum(self) -> Optional[float]:
        """Change of the baseline over `momentum_length` bars."""
        if len(self._values) <= self.momentum_length:
            return None
        return self._values[-1] - self._values[0]

    def update(self, price: float) -> float:
        self._prices.append(price)

        if len(self._prices) <= self.efficiency_length:
            result = price
        else:
            prices = self._prices
            path = sum(abs(prices[i] - prices[i - 1]) for i in range(1, len(prices)))
            ratio = abs(prices[-1] - prices[0]) / path if path > 0 else 0.0
            self.efficiency_ratio = min(ratio, 1.0)
            self.smoothing_constant = _smoothing_constant(
                self.efficiency_ratio, self._fast_sc, self._slow_sc)
            previous = self._values[-1]
            result = previous + self.smoothing_constant * (price - previous)

        self._values.append(result)
        return result
