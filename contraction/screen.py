"""
Universe screen: symbols with prior momentum that are contracting now.
"""
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

import numpy as np
import pandas as pd

from contraction.core.config import ContractionConfig
from contraction.core.detector import VolatilityContractionDetector
from contraction.detect import _validate_inputs, _iter_bars
from contraction.metrics.types import Prices

logger = logging.getLogger(__name__)

SCREEN_COLUMNS = [
    'symbol', 'growth', 'momentum', 'is_contraction', 'contraction_ratio',
    'pattern_high', 'pattern_low', 'time', 'passed'
]


@dataclass(frozen=True)
class ScreenConfig:
    """Momentum requirement applied before the contraction check."""
    min_growth_percent: float = 0.3
    growth_days: int = 60

    def __post_init__(self):
        if self.growth_days < 2:
            raise ValueError("growth_days must be ≥ 2")
        if self.min_growth_percent <= -1.0:
            raise ValueError("min_growth_percent must be > -1")


def compute_growth(close: Prices, growth_days: int) -> Optional[float]:
    """
    Fractional price change over the last `growth_days` bars.

    Measured from the close `growth_days - 1` bars ago to the latest close.
    Returns None when fewer than `growth_days` closes exist and 0.0 when the
    base close is zero.
    """
    close = np.asarray(close, dtype=np.float64)
    if growth_days < 2:
        raise ValueError("growth_days must be ≥ 2")
    if len(close) < growth_days:
        return None

    base = close[-growth_days]
    if base == 0.0:
        return 0.0
    return float((close[-1] - base) / base)


def screen_universe(
        frames: Mapping[str, pd.DataFrame],
        config: Optional[ContractionConfig] = None,
        screen_config: Optional[ScreenConfig] = None
) -> pd.DataFrame:
    """
    Screen a set of symbols for a volatility contraction on their latest bar.

    Args:
        frames: OHLC DataFrame per symbol, each ordered oldest first.
        config: Detector configuration shared by all symbols.
        screen_config: Growth requirement.

    Returns:
        One row per symbol (input order) with columns `SCREEN_COLUMNS`.
        `passed` is True when growth ≥ `min_growth_percent` and the latest
        bar confirms a contraction.

    Raises:
        KeyError / ValueError: Propagated from frame validation.
    """
    screen_config = screen_config or ScreenConfig()
    rows = []

    for symbol, df in frames.items():
        _validate_inputs(df)
        growth = compute_growth(df['close'].to_numpy(), screen_config.growth_days)

        detector = VolatilityContractionDetector(config)
        for bar in _iter_bars(df):
            detector.update(bar)
        result = detector.evaluate()
        last_time = detector.window().time[-1] if detector.bar_count else None

        passed = (
            growth is not None
            and growth >= screen_config.min_growth_percent
            and result.found
        )
        if passed:
            logger.info("%s: contraction at %s, ratio %.2f, growth %.1f%%",
                        symbol, last_time, result.contraction_ratio, growth * 100.0)

        rows.append({
            'symbol': symbol,
            'growth': np.nan if growth is None else growth,
            'momentum': np.nan if detector.momentum is None else detector.momentum,
            'is_contraction': result.found,
            'contraction_ratio': result.contraction_ratio,
            'pattern_high': np.nan if result.high is None else result.high,
            'pattern_low': np.nan if result.low is None else result.low,
            'time': last_time,
            'passed': passed,
        })

    return pd.DataFrame(rows, columns=SCREEN_COLUMNS)
