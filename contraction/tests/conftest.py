"""
Shared test fixtures and helpers.
"""
from typing import Callable, Optional, Sequence

import numpy as np
import pandas as pd
import pytest

from contraction.core.entity import PriceWindow


def _make_window(
        close: Sequence[float],
        high: Optional[Sequence[float]] = None,
        low: Optional[Sequence[float]] = None,
        open_: Optional[Sequence[float]] = None,
        baseline: float = 100.0,
        volatility: float = 1.0,
) -> PriceWindow:
    """Window over a flat baseline with constant ATR; bar times are 0..n-1."""
    close = np.asarray(close, dtype=np.float64)
    n = len(close)
    return PriceWindow.from_arrays(
        time=list(range(n)),
        open=close if open_ is None else open_,
        high=close + 0.5 if high is None else high,
        low=close - 0.5 if low is None else low,
        close=close,
        baseline=np.full(n, baseline),
        volatility=np.full(n, volatility),
    )


@pytest.fixture
def make_window() -> Callable[..., PriceWindow]:
    return _make_window


# 20 flat overscan bars followed by 10 scan bars whose legs halve:
# 90 -> 106 -> 98 -> 102 -> 100 (amplitudes 16, 8, 4, 2).
OVERSCAN_BAR = (100.5, 100.5, 100.5, 100.5)
CONTRACTING_SCAN_BARS = [
    # open, high, low, close
    (91.0, 92.0, 90.0, 101.0),
    (101.0, 104.0, 100.8, 103.5),
    (103.5, 106.0, 103.0, 105.0),
    (105.0, 105.0, 101.0, 101.5),
    (101.0, 101.0, 98.8, 99.2),
    (99.0, 99.5, 98.0, 98.5),
    (98.5, 101.2, 98.4, 101.0),
    (101.0, 102.0, 100.6, 101.5),
    (101.5, 101.8, 100.5, 100.8),
    (100.8, 101.0, 99.8, 100.0),
]

# Same layout with widening legs: 100.4 -> 101.2 -> 97 -> 106 -> 90.
WIDENING_SCAN_BARS = [
    (100.6, 101.0, 100.4, 100.8),
    (100.8, 101.2, 100.6, 101.0),
    (100.0, 100.2, 98.5, 99.0),
    (99.0, 99.2, 97.0, 97.5),
    (98.0, 103.0, 97.8, 102.5),
    (102.5, 106.0, 102.0, 105.5),
    (105.0, 105.2, 101.0, 101.5),
    (101.0, 101.0, 97.0, 97.5),
    (97.0, 97.2, 93.0, 93.5),
    (93.0, 93.2, 89.5, 90.0),
]


def _window_from_bars(scan_bars, overscan: int = 20) -> PriceWindow:
    bars = [OVERSCAN_BAR] * overscan + list(scan_bars)
    o, h, l, c = (np.array(col, dtype=np.float64) for col in zip(*bars))
    return _make_window(c, high=h, low=l, open_=o)


@pytest.fixture
def contracting_window() -> PriceWindow:
    return _window_from_bars(CONTRACTING_SCAN_BARS)


@pytest.fixture
def widening_window() -> PriceWindow:
    return _window_from_bars(WIDENING_SCAN_BARS)


@pytest.fixture
def random_ohlc() -> pd.DataFrame:
    """Random walk OHLC frame, 300 bars."""
    rng = np.random.default_rng(42)
    n = 300
    close = 100 * np.exp(np.cumsum(rng.normal(0.0005, 0.015, n)))
    high = close + np.abs(rng.normal(0.5, 0.2, n))
    low = close - np.abs(rng.normal(0.5, 0.2, n))
    open_ = np.roll(close, 1)
    open_[0] = close[0]
    return pd.DataFrame({
        'open': open_,
        'high': np.maximum(high, open_),
        'low': np.minimum(low, open_),
        'close': close,
        'volume': rng.integers(1_000, 10_000, n).astype(float),
    }, index=pd.date_range('2024-01-01', periods=n, freq='D'))
