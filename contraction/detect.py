from __future__ import annotations

import logging
from typing import Iterator, List, Optional

import numpy as np
import pandas as pd

from contraction.core.config import ContractionConfig
from contraction.core.detector import evaluate_window
from contraction.core.entity import Bar, DetectionResult, PriceWindow
from contraction.history import PatternHistory
from contraction.metrics.atr import compute_atr
from contraction.metrics.efficiency import compute_adaptive_baseline
from contraction.metrics.types import BarNumber

logger = logging.getLogger(__name__)

# ----------------------------
# Type Aliases (for clarity)
# ----------------------------
ContractionResult = pd.DataFrame

REQUIRED_COLUMNS = {'open', 'high', 'low', 'close'}


def _validate_inputs(df: pd.DataFrame) -> None:
    """Validate the OHLC input frame.

    Raises:
        KeyError: If any of 'open', 'high', 'low', 'close' is missing.
        ValueError: If a price column contains NaN.
    """
    missing = REQUIRED_COLUMNS - set(df.columns)
    if missing:
        raise KeyError(f"Missing required columns: {missing}. DataFrame must contain OHLC prices.")

    for col in sorted(REQUIRED_COLUMNS):
        if df[col].isna().any():
            raise ValueError(f"Column '{col}' contains NaN values")


def _bar_times(df: pd.DataFrame) -> list:
    """Bar times from a 'time' column, else the index. Must not go backwards."""
    times = df['time'].tolist() if 'time' in df.columns else df.index.tolist()
    for prev, cur in zip(times[:-1], times[1:]):
        if prev is not None and cur is not None and cur < prev:
            raise ValueError(f"bar at {cur} arrived after bar at {prev}")
    return times


def _iter_bars(df: pd.DataFrame) -> Iterator[Bar]:
    """Yield `Bar`s in row order."""
    times = df['time'].tolist() if 'time' in df.columns else df.index.tolist()
    volume = df['volume'].to_numpy(dtype=np.float64) if 'volume' in df.columns else np.zeros(len(df))
    columns = [df[col].to_numpy(dtype=np.float64) for col in ('open', 'high', 'low', 'close')]
    for t, o, h, l, c, v in zip(times, *columns, volume):
        yield Bar(time=t, open=float(o), high=float(h), low=float(l), close=float(c), volume=float(v))


def _evaluate_frame(df: pd.DataFrame, config: ContractionConfig) -> Iterator[DetectionResult]:
    """One `DetectionResult` per row, from indicators computed over the whole frame."""
    times = _bar_times(df)
    open_, high, low, close = (df[col].to_numpy(dtype=np.float64) for col in ('open', 'high', 'low', 'close'))

    baseline = compute_adaptive_baseline(
        close, config.fast_length, config.slow_length, config.efficiency_length
    )
    volatility = compute_atr(high, low, close, config.volatility_length, fill_warm_up=True)

    lookback = config.lookback
    for i in range(len(close)):
        if i + 1 < lookback:
            yield DetectionResult.not_found()
            continue
        bars = slice(i + 1 - lookback, i + 1)
        window = PriceWindow(
            time=tuple(times[bars]),
            open=open_[bars],
            high=high[bars],
            low=low[bars],
            close=close[bars],
            baseline=baseline[bars],
            volatility=volatility[bars],
            current=BarNumber(i),
        )
        yield evaluate_window(window, config)


def detect_volatility_contraction(
        df: pd.DataFrame,
        config: Optional[ContractionConfig] = None
) -> ContractionResult:
    """Evaluate contraction detection on every bar of an OHLC frame.

    Baseline and ATR are computed once for the whole frame; each bar then
    evaluates the trailing `lookback` window ending on it, exactly as the
    incremental detector would at that bar.

    Args:
        df: DataFrame with 'open', 'high', 'low', 'close' columns (and
            optionally 'time'), ordered oldest first.
        config: Detector configuration. Defaults to `ContractionConfig()`.

    Returns:
        A DataFrame with the same index as `df`, containing:
            - 'is_contraction': bool, pattern confirmed at this bar
            - 'contraction_ratio': float in [0, 1]
            - 'pattern_high' / 'pattern_low': envelope of the pattern, NaN
              when no intervals were built
            - 'pivot_count': number of zigzag vertices

    Raises:
        KeyError: If required columns are missing.
        ValueError: If prices contain NaN or bars are out of order.
    """
    _validate_inputs(df)
    config = config or ContractionConfig()

    n = len(df)
    is_contraction = np.zeros(n, dtype=bool)
    ratio = np.zeros(n, dtype=np.float64)
    pattern_high = np.full(n, np.nan, dtype=np.float64)
    pattern_low = np.full(n, np.nan, dtype=np.float64)
    pivot_count = np.zeros(n, dtype=np.int64)

    for i, result in enumerate(_evaluate_frame(df, config)):
        is_contraction[i] = result.found
        ratio[i] = result.contraction_ratio
        if result.high is not None:
            pattern_high[i] = result.high
            pattern_low[i] = result.low
        pivot_count[i] = len(result.pivots)

    logger.debug("evaluated %d bars, %d contraction bars", n, int(is_contraction.sum()))

    return pd.DataFrame({
        'is_contraction': is_contraction,
        'contraction_ratio': ratio,
        'pattern_high': pattern_high,
        'pattern_low': pattern_low,
        'pivot_count': pivot_count,
    }, index=df.index)


def find_contraction_patterns(
        df: pd.DataFrame,
        config: Optional[ContractionConfig] = None
) -> List[DetectionResult]:
    """Distinct contraction patterns in `df`.

    A pattern is usually confirmed on several consecutive bars while it
    forms; only the last confirmation of each overlapping run is kept.
    """
    _validate_inputs(df)

    history = PatternHistory()
    for result in _evaluate_frame(df, config or ContractionConfig()):
        history.add(result)

    logger.info("found %d contraction patterns in %d bars", len(history), len(df))
    return list(history)
