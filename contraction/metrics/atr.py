"""
Average true range, the volatility yardstick for interval significance.

`compute_atr` works on whole arrays for batch use; `AverageTrueRange` advances
one bar at a time inside the detector. Both follow Wilder's smoothing.
"""
from typing import Optional, Tuple

import numpy as np
from .types import Prices, ATRArray, LongFloatArray


def _as_price_arrays(high, low, close) -> Tuple[Prices, Prices, Prices]:
    """Coerce high/low/close to float64 1D arrays of one length."""
    arrays = tuple(np.asarray(series) for series in (high, low, close))
    if not all(np.issubdtype(arr.dtype, np.number) for arr in arrays):
        raise TypeError("high, low and close must be numeric")
    if len({arr.shape for arr in arrays}) != 1:
        raise ValueError("high, low and close must have the same shape")
    if arrays[0].ndim != 1:
        raise ValueError("high, low and close must be 1-dimensional")
    return tuple(arr.astype(np.float64, copy=False) for arr in arrays)


def compute_true_range(high: Prices, low: Prices, close: Prices) -> LongFloatArray:
    """
    Bar span widened by any gap from the previous close.

    The first bar has no previous close, so its true range is `high - low`.

    Raises:
        TypeError: On non-numeric input.
        ValueError: On mismatched or multi-dimensional input.
    """
    high, low, close = _as_price_arrays(high, low, close)
    tr = high - low
    if len(tr) > 1:
        prev_close = close[:-1]
        gap = np.maximum(np.abs(high[1:] - prev_close), np.abs(low[1:] - prev_close))
        tr[1:] = np.maximum(tr[1:], gap)
    return tr


def compute_atr(
        high: Prices,
        low: Prices,
        close: Prices,
        period: int = 14,
        fill_warm_up: bool = False
) -> ATRArray:
    """
    Wilder ATR over whole arrays.

    Args:
        high, low, close: Price series of equal length.
        period: Smoothing length (≥ 1).
        fill_warm_up: Report the running mean of the true ranges on the first
            `period - 1` bars instead of NaN, matching `AverageTrueRange`.

    Returns:
        ATRArray: the mean of the first `period` true ranges at `period - 1`,
        then `(tr + (period - 1) * atr_prev) / period`.
    """
    if period < 1:
        raise ValueError("period must be ≥ 1")

    tr = compute_true_range(high, low, close)
    n = len(tr)
    atr = np.full(n, np.nan, dtype=np.float64)

    if fill_warm_up:
        warm = min(period - 1, n)
        atr[:warm] = np.cumsum(tr[:warm]) / np.arange(1, warm + 1)
    if n < period:
        return atr

    atr[period - 1] = tr[:period].sum() / period
    for i in range(period, n):
        atr[i] = (tr[i] + (period - 1) * atr[i - 1]) / period
    return atr


class AverageTrueRange:
    """
    Incremental Wilder ATR, advanced one bar at a time.

    Matches `compute_atr(..., fill_warm_up=True)` bar for bar: during warm-up
    the running mean of the true ranges seen so far is reported instead of
    NaN, so every bar carries a finite volatility.
    """
    __slots__ = ('length', '_prev_close', '_count', '_sum', '_value')

    def __init__(self, length: int = 14):
        if length < 1:
            raise ValueError("length must be ≥1")
        self.length = length
        self._prev_close: Optional[float] = None
        self._count = 0
        self._sum = 0.0
        self._value: Optional[float] = None

    @property
    def is_ready(self) -> bool:
        return self._count >= self.length

    @property
    def value(self) -> Optional[float]:
        return self._value

    def update(self, high: float, low: float, close: float) -> float:
        if self._prev_close is None:
            tr = high - low
        else:
            tr = max(high - low, abs(high - self._prev_close), abs(low - self._prev_close))
        self._prev_close = close
        self._count += 1

        if self._count <= self.length:
            self._sum += tr
            self._value = self._sum / self._count
        else:
            self._value = (tr + (self.length - 1) * self._value) / self.length
        return self._value
