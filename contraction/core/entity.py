from dataclasses import dataclass, field, replace
from typing import Any, Optional, Sequence, Tuple

import numpy as np

from contraction.metrics.types import (
    BarNumber, BarOffset, IntervalType, Prices, BaselineArray, ATRArray, to_offset, to_number
)


@dataclass(frozen=True)
class Bar:
    """Single OHLCV bar as delivered by the host feed."""
    time: Any
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0


@dataclass(frozen=True)
class BarPoint:
    """A price observed at a specific bar."""
    number: BarNumber
    time: Any
    price: float


@dataclass(frozen=True)
class Interval:
    """Contiguous run of bars whose closes sit on one side of the baseline."""
    type: IntervalType
    open: BarPoint
    high: BarPoint
    low: BarPoint
    close: BarPoint
    highest_close: float
    lowest_close: float

    @property
    def extremum(self) -> BarPoint:
        """High of an above-baseline run, low of a below-baseline run."""
        return self.high if self.type is IntervalType.ABOVE else self.low

    @property
    def opposite_extremum(self) -> BarPoint:
        return self.low if self.type is IntervalType.ABOVE else self.high

    @property
    def bar_count(self) -> int:
        return self.close.number - self.open.number + 1


def combine_intervals(survivor: Interval, absorbed: Interval) -> Interval:
    """
    Fold `absorbed` into `survivor`, keeping the survivor's type.

    Boundaries widen to cover both runs; extremes combine by max/min and the
    survivor keeps its own extreme bar on ties.
    """
    older, newer = sorted((survivor, absorbed), key=lambda iv: iv.open.number)
    return replace(
        survivor,
        open=older.open,
        close=newer.close,
        high=absorbed.high if absorbed.high.price > survivor.high.price else survivor.high,
        low=absorbed.low if absorbed.low.price < survivor.low.price else survivor.low,
        highest_close=max(survivor.highest_close, absorbed.highest_close),
        lowest_close=min(survivor.lowest_close, absorbed.lowest_close),
    )


@dataclass(frozen=True)
class PivotPoint:
    """Vertex of the zigzag skeleton."""
    bar_number: BarNumber
    bar_offset: BarOffset
    time: Any
    price: float


@dataclass(frozen=True)
class LegDelta:
    """How a leg compares with the leg before it."""
    amplitude: float
    overlap: float
    contracting: bool


@dataclass(frozen=True)
class DetectionResult:
    found: bool
    open_time: Any = None
    close_time: Any = None
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    pivots: Tuple[PivotPoint, ...] = ()
    contraction_ratio: float = 0.0
    legs: Tuple[LegDelta, ...] = ()
    intervals: Tuple[Interval, ...] = ()

    @classmethod
    def not_found(cls) -> 'DetectionResult':
        return cls(found=False)


@dataclass(frozen=True, eq=False)
class PriceWindow:
    """
    Oldest-to-newest slice of bars with their baseline and volatility.

    Position `len - 1` is the current bar, whose absolute number is `current`.
    """
    time: Tuple[Any, ...]
    open: Prices
    high: Prices
    low: Prices
    close: Prices
    baseline: BaselineArray
    volatility: ATRArray
    current: BarNumber
    _length: int = field(init=False, repr=False)

    def __post_init__(self):
        n = len(self.close)
        arrays = (self.open, self.high, self.low, self.close, self.baseline, self.volatility)
        if len(self.time) != n or any(len(arr) != n for arr in arrays):
            raise ValueError("All window series must have the same length")
        if self.current < n - 1:
            raise ValueError("current bar number precedes the start of the window")
        object.__setattr__(self, '_length', n)

    @classmethod
    def from_arrays(
            cls,
            time: Sequence[Any],
            open: Sequence[float],
            high: Sequence[float],
            low: Sequence[float],
            close: Sequence[float],
            baseline: Sequence[float],
            volatility: Sequence[float],
            current: Optional[int] = None
    ) -> 'PriceWindow':
        n = len(close)
        return cls(
            time=tuple(time),
            open=np.asarray(open, dtype=np.float64),
            high=np.asarray(high, dtype=np.float64),
            low=np.asarray(low, dtype=np.float64),
            close=np.asarray(close, dtype=np.float64),
            baseline=np.asarray(baseline, dtype=np.float64),
            volatility=np.asarray(volatility, dtype=np.float64),
            current=BarNumber(n - 1 if current is None else current),
        )

    def __len__(self) -> int:
        return self._length

    def position(self, number: BarNumber) -> int:
        """Array position of an absolute bar number."""
        pos = self._length - 1 - to_offset(number, self.current)
        if pos < 0:
            raise IndexError(f"bar {number} is outside the window")
        return pos

    def number_at(self, offset: int) -> BarNumber:
        return to_number(BarOffset(offset), self.current)

    def point(self, offset: int, series: str) -> BarPoint:
        """`BarPoint` for the bar `offset` back from the current one."""
        pos = self._length - 1 - offset
        if pos < 0:
            raise IndexError(f"offset {offset} is outside the window")
        return BarPoint(self.number_at(offset), self.time[pos], float(getattr(self, series)[pos]))
