from enum import Enum

import numpy as np
from typing import NewType, TypeAlias
from numpy.typing import NDArray

LongFloatArray: TypeAlias = NDArray[np.float64]
FloatArray: TypeAlias = NDArray[np.float32]
BoolArray: TypeAlias = NDArray[np.bool_]


Prices        = LongFloatArray
ATRArray      = LongFloatArray   # VolatilityArray, ATR is volatility in price units
BaselineArray = LongFloatArray   # adaptive moving average, price units
RatioArray    = LongFloatArray   # efficiency ratio in [0, 1]

ContractionMask = BoolArray

# Absolute bar number, counted from the first bar ever fed (0-based).
BarNumber = NewType('BarNumber', int)
# Offset back from the most recent bar (0 = current bar).
BarOffset = NewType('BarOffset', int)


def to_offset(number: BarNumber, current: BarNumber) -> BarOffset:
    """Convert an absolute bar number to an offset from `current`."""
    if number > current:
        raise ValueError(f"bar {number} is ahead of current bar {current}")
    return BarOffset(current - number)


def to_number(offset: BarOffset, current: BarNumber) -> BarNumber:
    """Convert an offset from `current` back to an absolute bar number."""
    if offset < 0 or offset > current:
        raise ValueError(f"offset {offset} out of range for current bar {current}")
    return BarNumber(current - offset)


class IntervalType(Enum):
    """Side of the baseline a run of closes sits on."""
    ABOVE = 'above'
    BELOW = 'below'

    @property
    def opposite(self) -> 'IntervalType':
        return IntervalType.BELOW if self is IntervalType.ABOVE else IntervalType.ABOVE
